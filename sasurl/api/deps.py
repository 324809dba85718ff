from typing import Annotated

from fastapi import Depends, Request

from sasurl.core.config import Settings
from sasurl.services.issuer import SignedUrlIssuer


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_issuer(request: Request) -> SignedUrlIssuer:
    return request.app.state.issuer


Issuer = Annotated[SignedUrlIssuer, Depends(get_issuer)]
