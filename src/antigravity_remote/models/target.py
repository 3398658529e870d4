"""
Discovery models: /json/list and /json/version records.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Target(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    type: str = ""  # "page" | "iframe" | "service_worker" | ...
    title: str = ""
    url: str = ""
    description: str = ""
    devtools_frontend_url: Optional[str] = Field(default=None, alias="devtoolsFrontendUrl")
    web_socket_debugger_url: Optional[str] = Field(default=None, alias="webSocketDebuggerUrl")


class VersionInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    browser: Optional[str] = Field(default=None, alias="Browser")
    protocol_version: Optional[str] = Field(default=None, alias="Protocol-Version")
    user_agent: Optional[str] = Field(default=None, alias="User-Agent")
    v8_version: Optional[str] = Field(default=None, alias="V8-Version")
    webkit_version: Optional[str] = Field(default=None, alias="WebKit-Version")
    web_socket_debugger_url: Optional[str] = Field(default=None, alias="webSocketDebuggerUrl")
