from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from credpix.exceptions import PixContractError
from credpix.models.pix import MAX_DESCRIPTION, parse_amount
from credpix.pix import strip_accents
from web.deps import get_pix_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pix")

CREATE_REQUIRED_FIELDS = ["payerEmail", "payerName", "receiverName", "amount"]
# EMV QR Code payloads are capped at 512 characters.
MAX_QRCODE_PAYLOAD = 512
PAYMENT_INSTRUCTIONS = "Após realizar o pagamento, envie o comprovante para confirmação."


async def _read_json(request: Request) -> dict | None:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _bad_request(message: str, **extra) -> JSONResponse:
    return JSONResponse({"message": message, **extra}, status_code=400)


@router.post("/create-static")
async def create_static(request: Request):
    logger.info("POST /api/pix/create-static — generating static PIX")
    body = await _read_json(request)
    if body is None:
        logger.warning("Static PIX rejected: body is not a JSON object")
        return _bad_request("Corpo da requisição inválido.")

    if any(not body.get(field) for field in CREATE_REQUIRED_FIELDS):
        logger.warning("Static PIX rejected: missing required fields")
        return _bad_request("Dados incompletos para criar PIX.", required=CREATE_REQUIRED_FIELDS)

    try:
        amount = parse_amount(body["amount"])
    except PixContractError:
        logger.warning("Static PIX rejected: invalid amount %r", body["amount"])
        return _bad_request("Valor inválido. Deve ser um número maior que zero.")

    receiver_name = str(body["receiverName"])
    description = str(body.get("description") or "").strip()
    if not description:
        description = f"Pagamento para {receiver_name}"
    # BR Code text fields are ASCII.
    description = strip_accents(description)[:MAX_DESCRIPTION]

    service = get_pix_service(request)
    try:
        result = service.generate(amount, description)
    except PixContractError as exc:
        logger.warning("Static PIX rejected: %s", exc)
        return _bad_request(str(exc))

    return JSONResponse(
        {
            "message": "PIX estático gerado com sucesso!",
            "payment": {
                "type": "PIX",
                "amount": float(result.amount),
                "receiverName": receiver_name,
                "receiverCpf": body.get("receiverCpf"),
                "pixKey": result.pix_key,
                "pixCode": result.pix_code,
                "qrCodeUrl": result.qr_code_url,
                "transactionId": result.transaction_id,
                "description": result.description,
                "instructions": PAYMENT_INSTRUCTIONS,
            },
            "provider": "STATIC_PIX",
        }
    )


@router.post("/regenerate")
async def regenerate(request: Request):
    logger.info("POST /api/pix/regenerate — rebuilding static PIX")
    body = await _read_json(request)
    if body is None:
        return _bad_request("Corpo da requisição inválido.")

    if not body.get("amount") or not body.get("transactionId"):
        logger.warning("PIX regenerate rejected: missing amount or transactionId")
        return _bad_request(
            "Dados incompletos para regenerar PIX.", required=["amount", "transactionId"]
        )

    service = get_pix_service(request)
    try:
        result = service.regenerate(
            body["amount"], str(body.get("description") or ""), str(body["transactionId"])
        )
    except PixContractError as exc:
        logger.warning("PIX regenerate rejected: %s", exc)
        return _bad_request(str(exc))

    return JSONResponse(
        {
            "amount": float(result.amount),
            "pixKey": result.pix_key,
            "pixCode": result.pix_code,
            "qrCodeUrl": result.qr_code_url,
            "transactionId": result.transaction_id,
        }
    )


@router.post("/validate-key")
async def validate_key(request: Request):
    body = await _read_json(request)
    pix_key = body.get("pixKey") if body else None
    if not pix_key:
        logger.warning("PIX key validation rejected: no key")
        return _bad_request("Chave PIX é obrigatória.")

    is_valid = get_pix_service(request).classify(pix_key)
    logger.info("POST /api/pix/validate-key — valid=%s", is_valid)
    return JSONResponse(
        {
            "pixKey": pix_key,
            "isValid": is_valid,
            "message": "Chave PIX válida" if is_valid else "Chave PIX inválida",
        }
    )


@router.get("/config")
async def pix_config(request: Request):
    service = get_pix_service(request)
    profile = service.profile
    return JSONResponse(
        {
            "pixKey": profile.pix_key,
            "merchantName": profile.merchant_name,
            "merchantCity": profile.merchant_city,
            "isConfigured": service.is_configured(),
        }
    )


@router.get("/qrcode.png")
async def pix_qrcode(request: Request, code: str = ""):
    if not code:
        return _bad_request("Código PIX é obrigatório.")
    if len(code) > MAX_QRCODE_PAYLOAD:
        logger.warning("QR code rejected: payload of %d characters", len(code))
        return _bad_request("Código PIX muito longo.")
    try:
        png = get_pix_service(request).qr_code_png(code)
    except PixContractError as exc:
        logger.warning("QR code rejected: %s", exc)
        return _bad_request("Código PIX não cabe em um QR Code.")
    logger.debug("QR code rendered: %d bytes", len(png))
    return Response(content=png, media_type="image/png")
