#!/usr/bin/env python3
"""
Trace WBXML payloads to XML / JSON for comparison and debugging.

Usage:
  python tools/trace_wbxml.py path/to/payload.wbxml > out.xml
  # Or with hex input:
  echo "03016a..." | python tools/trace_wbxml.py --hex --format tokens - > out.json
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from aswbxml.cli import main

if __name__ == "__main__":
    sys.exit(main())
