from __future__ import annotations

from pydantic import BaseModel, Field


class TransportConfig(BaseModel):
    read_chunk_size: int = Field(4096, gt=0, description="Bytes requested per read call")
    retry_delay: float = Field(
        0.01, gt=0, description="Seconds to wait before retrying a would-block read or write"
    )


class AppConfig(BaseModel):
    name: str = "stdiolink"
    log_level: str = "INFO"
    transport: TransportConfig = Field(default_factory=TransportConfig)


__all__ = [
    "TransportConfig",
    "AppConfig",
]
