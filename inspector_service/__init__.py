"""
HTTP front door for inspecting captured ActiveSync WBXML traffic.
"""
