from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class DecodeRequest(BaseModel):
    hex: Optional[str] = Field(None, description="WBXML payload as hex")
    base64: Optional[str] = Field(None, description="WBXML payload as base64")
    show_namespaces: Optional[bool] = None
    show_doc_refs: Optional[bool] = None


class DecodeResponse(BaseModel):
    length: int
    xml: str
    tree: Dict[str, Any]


class EncodeRequest(BaseModel):
    xml: str


class EncodeResponse(BaseModel):
    length: int
    hex: str
    base64: str


class CodecError(BaseModel):
    error: str
    message: str


class CodecErrorResponse(BaseModel):
    detail: CodecError
