"""Shared fakes and sample model payloads for the test suite."""
from __future__ import annotations

import json
from typing import Any, Sequence

from repo_factcheck.domain.entities import EntryKind, RepoMetadata, TreeEntry, TreeListing
from repo_factcheck.domain.reports import AnalysisItem, ChatMessage, Verdict
from repo_factcheck.domain.value_objects import RepositoryIdentifier


def blob(path: str) -> TreeEntry:
    return TreeEntry(path=path, kind=EntryKind.FILE, content_ref=f"blob://{path}")


class FakeFetcher:
    """In-memory RepoFetcher. Blob values that are exceptions get raised."""

    def __init__(
        self,
        entries: list[TreeEntry],
        blobs: dict[str, Any] | None = None,
        truncated: bool = False,
        metadata_error: Exception | None = None,
    ) -> None:
        self.entries = entries
        self.blobs = blobs or {}
        self.truncated = truncated
        self.metadata_error = metadata_error
        self.calls: list[str] = []

    async def fetch_metadata(self, repo: RepositoryIdentifier) -> RepoMetadata:
        self.calls.append("metadata")
        if self.metadata_error:
            raise self.metadata_error
        return RepoMetadata(owner=repo.owner, name=repo.name, default_branch="main")

    async def fetch_tree(self, repo: RepositoryIdentifier, branch: str) -> TreeListing:
        self.calls.append(f"tree:{branch}")
        return TreeListing(entries=self.entries, truncated=self.truncated)

    async def fetch_blob(self, content_ref: str) -> str | None:
        self.calls.append(content_ref)
        path = content_ref.removeprefix("blob://")
        value = self.blobs.get(path, f"content of {path}")
        if isinstance(value, Exception):
            raise value
        return value


class FakeLlm:
    """LlmGateway returning queued replies (exceptions are raised)."""

    def __init__(self, *replies: Any) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    async def complete(
        self,
        system_prompt: str,
        messages: Sequence[ChatMessage],
        *,
        json_schema: dict[str, Any] | None = None,
        schema_name: str = "response",
        temperature: float | None = None,
    ) -> str:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "messages": list(messages),
                "json_schema": json_schema,
                "temperature": temperature,
            }
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


ITEM = AnalysisItem(
    topic="Redis",
    resume_claim="Used Redis for caching",
    code_observation="Only a redis config file, no client calls",
    question_basis="[JD requirement]: caching [Code status]: config only [Interviewer intent]: depth",
    verdict=Verdict.EXAGGERATED,
    interview_question="Where is the cache actually read?",
    score=70,
)

REPORT_JSON = json.dumps(
    {
        "items": [ITEM.model_dump(mode="json")],
        "summary": "One exaggerated claim.",
        "overall_trust_score": 90,
    }
)

FEEDBACK_JSON = json.dumps(
    {
        "defense_score": 70,
        "logic_score": 30,
        "logic_reasoning": "Sound overall.",
        "logic_improvement": "Missed TTL handling.",
        "honesty_score": 25,
        "honesty_reasoning": "Admitted the gap.",
        "honesty_improvement": "Hesitated at first.",
        "solution_score": 15,
        "solution_reasoning": "Proposed a fix.",
        "solution_improvement": "Fix was vague.",
        "feedback_summary": "Honest but shallow.",
        "positive_feedback": ["a", "b", "c"],
        "constructive_feedback": ["d", "e", "f"],
        "action_items": ["g", "h", "i"],
    }
)

HISTORY = [
    ChatMessage(role="model", text="Where is the cache actually read?"),
    ChatMessage(role="user", text="I only added the config, honestly."),
]


