import pytest
from pydantic import ValidationError

from stdiolink.config import AppConfig, TransportConfig


def test_config_defaults():
    cfg = AppConfig()
    assert cfg.name == "stdiolink"
    assert cfg.log_level == "INFO"
    assert cfg.transport.read_chunk_size == 4096
    assert cfg.transport.retry_delay == 0.01


def test_config_customization():
    cfg = AppConfig(
        name="custom",
        log_level="DEBUG",
        transport=TransportConfig(read_chunk_size=1024, retry_delay=0.05),
    )
    assert cfg.name == "custom"
    assert cfg.transport.read_chunk_size == 1024
    assert cfg.transport.retry_delay == 0.05


@pytest.mark.parametrize("field", ["read_chunk_size", "retry_delay"])
def test_transport_config_rejects_non_positive(field):
    with pytest.raises(ValidationError):
        TransportConfig(**{field: 0})
