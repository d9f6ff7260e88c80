"""
Inspection endpoints: decode captured WBXML, encode ActiveSync XML
"""
import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from aswbxml import ViewOptions, WBXMLError, WBXMLPayload

from ..config import Settings, get_settings
from ..schemas import CodecErrorResponse, DecodeRequest, DecodeResponse, EncodeRequest, EncodeResponse

router = APIRouter(prefix="/wbxml", tags=["wbxml"])
logger = logging.getLogger(__name__)

CODEC_ERROR_RESPONSES = {422: {"model": CodecErrorResponse, "description": "Payload rejected by the codec"}}


def _codec_error(exc: WBXMLError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"error": type(exc).__name__, "message": str(exc)},
    )


def _payload_bytes(payload: DecodeRequest) -> bytes:
    if (payload.hex is None) == (payload.base64 is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide exactly one of 'hex' or 'base64'",
        )
    try:
        if payload.hex is not None:
            return bytes.fromhex("".join(payload.hex.split()))
        return base64.b64decode(payload.base64, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Payload is not valid {'hex' if payload.hex is not None else 'base64'}: {exc}",
        )


@router.post("/decode", response_model=DecodeResponse, responses=CODEC_ERROR_RESPONSES)
def decode_payload(payload: DecodeRequest, settings: Settings = Depends(get_settings)):
    data = _payload_bytes(payload)
    if len(data) > settings.MAX_PAYLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Payload of {len(data)} bytes exceeds {settings.MAX_PAYLOAD_BYTES}",
        )

    defaults = ViewOptions.from_settings()
    options = ViewOptions(
        show_namespaces=defaults.show_namespaces if payload.show_namespaces is None else payload.show_namespaces,
        show_doc_refs=defaults.show_doc_refs if payload.show_doc_refs is None else payload.show_doc_refs,
    )

    logger.info(f"🔍 Decoding {len(data)} byte WBXML payload")
    wbxml = WBXMLPayload.from_bytes(data)
    try:
        return DecodeResponse(
            length=len(data),
            xml=wbxml.to_xml(options),
            tree=wbxml.tree(options).to_dict(),
        )
    except WBXMLError as exc:
        raise _codec_error(exc)


@router.post("/encode", response_model=EncodeResponse, responses=CODEC_ERROR_RESPONSES)
def encode_payload(payload: EncodeRequest):
    logger.info(f"📦 Encoding {len(payload.xml)} characters of XML")
    try:
        data = WBXMLPayload.from_xml(payload.xml).to_bytes()
    except WBXMLError as exc:
        raise _codec_error(exc)

    return EncodeResponse(
        length=len(data),
        hex=data.hex(),
        base64=base64.b64encode(data).decode("ascii"),
    )
