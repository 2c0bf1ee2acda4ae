"""Shared fixtures: a recording fake provider and a sample directory."""

import json
from typing import List, Union

import pytest

from models.users import Role, User, UserDirectory
from utils.llm import LLMClient, LLMProvider, LLMRequest, LLMResponse, parse_structured


class RecordingProvider(LLMProvider):
    """Provider double that replays canned replies and records every request."""

    name = "fake"
    supports_media = True

    def __init__(self, replies: List[Union[str, dict, Exception]] = None):
        self.replies = list(replies or [])
        self.requests: List[LLMRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def call_single(self, request: LLMRequest) -> LLMResponse:
        self.requests.append(request)
        reply = self.replies.pop(0) if self.replies else "{}"
        if isinstance(reply, Exception):
            raise reply
        content = json.dumps(reply) if isinstance(reply, dict) else reply
        parsed = parse_structured(content, request.response_format) if request.response_format else None
        return LLMResponse(content=content, parsed_data=parsed, latency_ms=1.0, token_usage={})


@pytest.fixture
def provider():
    return RecordingProvider()


@pytest.fixture
def llm_client(provider):
    return LLMClient(provider=provider)


@pytest.fixture
def users():
    """Admin -> RSM -> ASM -> Sales chain, a second branch, and a BD specialist."""
    return [
        User(id="admin", name="Admin User", role=Role.ADMIN),
        User(id="rsm", name="Rajesh Kumar", role=Role.REGIONAL_SALES_MANAGER, manager_id="admin"),
        User(id="asm", name="Amit Verma", role=Role.AREA_SALES_MANAGER, manager_id="rsm"),
        User(id="sales", name="Neha Joshi", role=Role.SALES, manager_id="asm"),
        User(id="zsm", name="Kamlesh Gupta", role=Role.ZONAL_SALES_MANAGER, manager_id="admin"),
        User(id="asm-west", name="Ashish Singh", role=Role.AREA_SALES_MANAGER, manager_id="zsm"),
        User(id="bd", name="Falak Chawla", role=Role.BUSINESS_DEVELOPMENT, manager_id="admin"),
    ]


@pytest.fixture
def directory(users):
    return UserDirectory(users)
