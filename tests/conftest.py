import os
from datetime import datetime

import pytest
from loguru import logger

from sasurl.core.config import get_settings
from sasurl.services.issuer import SignedUrlIssuer


RUN_INTEGRATION = os.getenv("RUN_INTEGRATION") == "1"

# Well-known Azurite development account; valid base64 so real signing works offline.
EMULATOR_ACCOUNT = "devstoreaccount1"
EMULATOR_KEY = "Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=="
CONTAINER = "sas-url-service-test"


class FakeSigner:
    """Deterministic signer that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str, datetime]] = []

    def sign(self, container: str, name: str, permission: str, expiry: datetime) -> str:
        self.calls.append((container, name, permission, expiry))
        return f"sp={permission[0]}&sig=fake"

    def url_for(self, container: str, name: str, token: str) -> str:
        return f"https://{EMULATOR_ACCOUNT}.blob.core.windows.net/{container}/{name}?{token}"


@pytest.fixture(scope="session")
def integration_enabled() -> bool:
    return RUN_INTEGRATION


@pytest.fixture
def credentials() -> dict[str, str]:
    return {"account_name": EMULATOR_ACCOUNT, "account_key": EMULATOR_KEY}


@pytest.fixture
def issuer(credentials) -> SignedUrlIssuer:
    return SignedUrlIssuer(
        container=CONTAINER,
        read_ttl="1m",
        write_ttl="1m",
        credentials=credentials,
    )


@pytest.fixture
def fake_signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def fake_issuer(credentials, fake_signer) -> SignedUrlIssuer:
    return SignedUrlIssuer(
        container=CONTAINER,
        read_ttl="1m",
        write_ttl="5m",
        credentials=credentials,
        signer=fake_signer,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # Sinks added by create_app/main may point at a closed capture stream.
    logger.remove()
