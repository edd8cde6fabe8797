# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_cipher

"""FastAPI server implementation for the Cipher microservice.

This module provides the HTTP interface for CoReason Cipher, exposing
endpoints for encryption, decryption, the envelope heuristic, participant
validation, conversation id generation and health checks.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from coreason_cipher.exceptions import InputError
from coreason_cipher.main import MessageCipherAsync
from coreason_cipher.models import DecryptionResult, EncryptionResult
from coreason_cipher.utils.logger import logger


class EncryptRequest(BaseModel):
    """Request model for encrypting a message."""

    content: str
    conversation_id: str
    participants: List[str]


class DecryptRequest(BaseModel):
    """Request model for decrypting an envelope."""

    encrypted_content: str
    conversation_id: str
    participants: List[str]


class InspectRequest(BaseModel):
    text: str


class InspectResponse(BaseModel):
    encrypted: bool


class ConversationIdRequest(BaseModel):
    address_a: str
    address_b: str


class ConversationIdResponse(BaseModel):
    conversation_id: str


class ValidateRequest(BaseModel):
    participants: List[str]


class ValidateResponse(BaseModel):
    valid: bool


class HealthResponse(BaseModel):
    """Response model for service health check."""

    status: str
    cipher: str
    cached_keys: int


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manages the lifecycle of the Cipher application.

    Creates one MessageCipherAsync on startup; its key cache is dropped on shutdown.
    """
    cipher = MessageCipherAsync()
    async with cipher:
        app.state.cipher = cipher
        yield


app = FastAPI(lifespan=lifespan)


@app.post("/encrypt", response_model=EncryptionResult)
async def encrypt(request: EncryptRequest) -> EncryptionResult:
    """Encrypts a message.

    Raises:
        HTTPException: 400 on missing input, 500 if encryption fails (Fail Closed).
    """
    try:
        result: EncryptionResult = await app.state.cipher.encrypt(
            request.content, request.conversation_id, request.participants
        )
        return result
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Encrypt endpoint failed: {e}")
        raise HTTPException(status_code=500, detail="Encryption failed") from e


@app.post("/decrypt", response_model=DecryptionResult)
async def decrypt(request: DecryptRequest) -> DecryptionResult:
    """Decrypts an envelope. Failures are reported in the body, not as errors."""
    result: DecryptionResult = await app.state.cipher.decrypt(
        request.encrypted_content, request.conversation_id, request.participants
    )
    return result


@app.post("/inspect", response_model=InspectResponse)
async def inspect(request: InspectRequest) -> InspectResponse:
    return InspectResponse(encrypted=app.state.cipher.looks_encrypted(request.text))


@app.post("/conversation-id", response_model=ConversationIdResponse)
async def conversation_id(request: ConversationIdRequest) -> ConversationIdResponse:
    return ConversationIdResponse(
        conversation_id=app.state.cipher.generate_conversation_id(request.address_a, request.address_b)
    )


@app.post("/participants/validate", response_model=ValidateResponse)
async def validate(request: ValidateRequest) -> ValidateResponse:
    return ValidateResponse(valid=app.state.cipher.validate_participants(request.participants))


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Checks the health of the Cipher service.

    Raises:
        HTTPException: 503 if the cipher is not initialized.
    """
    cipher = getattr(app.state, "cipher", None)
    if cipher is None:
        raise HTTPException(status_code=503, detail="Cipher not initialized")
    return HealthResponse(status="ok", cipher="aes-256-gcm", cached_keys=len(cipher.key_cache))
