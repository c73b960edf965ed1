from typing import Annotated

from fastapi import Depends, Request

from lingua_relay.config import Settings
from lingua_relay.models.google_upstream import GoogleUpstream


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream(request: Request) -> GoogleUpstream:
    return request.app.state.upstream


SettingsDep = Annotated[Settings, Depends(get_settings)]
UpstreamDep = Annotated[GoogleUpstream, Depends(get_upstream)]
