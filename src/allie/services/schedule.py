"""Schedule service - "remind me to ..." records kept in a Firestore collection.

Records are created from free text, listed newest first, and deleted either by
document id or by a keyword matched against the lower-cased task. A keyword
that matches several records never deletes anything; the caller is asked to
pick an id instead.
"""
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from google.cloud import firestore

from allie.core.errors import ScheduleStoreError
from allie.core.logging import logger

UNSPECIFIED = "unspecified"

_DAYS = "today|tomorrow|monday|tuesday|wednesday|thursday|friday|saturday|sunday"
_TIME = r"[0-9]{1,2}(?::[0-9]{2})?\s?(?:am|pm)?"

LIST_PATTERN = re.compile(
    r"what('| i)?s on my schedule|what('| i)?s my schedule|show schedule|list schedule",
    re.IGNORECASE,
)
TASK_PATTERN = re.compile(r"remind me to (.+?)(?: at| on|$)", re.IGNORECASE)
TIME_AT_PATTERN = re.compile(rf"\bat ({_TIME})", re.IGNORECASE)
TIME_PATTERN = re.compile(rf"({_TIME})", re.IGNORECASE)
DATE_ON_PATTERN = re.compile(rf"\bon ({_DAYS})\b", re.IGNORECASE)
DATE_PATTERN = re.compile(rf"\b({_DAYS})\b", re.IGNORECASE)
DELETE_TRIGGER_PATTERN = re.compile(r"^(?:delete|remove)\s*", re.IGNORECASE)


@dataclass
class ScheduleEvent:
    """Schedule record as stored in the collection."""
    task: str
    time: str = UNSPECIFIED
    date: str = UNSPECIFIED
    created_at: Optional[datetime] = None
    id: Optional[str] = None
    # Lower-cased task persisted for keyword matching
    task_lower: Optional[str] = None

    def __post_init__(self):
        if self.task_lower is None:
            self.task_lower = self.task.lower()

    def describe(self) -> str:
        return f"{self.task} at {self.time} on {self.date}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": self.task,
            "task_lower": self.task_lower,
            "time": self.time,
            "date": self.date,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], id: Optional[str] = None) -> 'ScheduleEvent':
        return cls(
            id=id,
            task=data.get("task", ""),
            task_lower=data.get("task_lower"),
            time=data.get("time", UNSPECIFIED),
            date=data.get("date", UNSPECIFIED),
            created_at=data.get("createdAt"),
        )


@dataclass
class ParsedCommand:
    task: Optional[str]
    time: str = UNSPECIFIED
    date: str = UNSPECIFIED


def is_list_request(prompt: str) -> bool:
    return bool(LIST_PATTERN.search(prompt))


def parse_schedule_command(prompt: str) -> ParsedCommand:
    """Pull task, time and date out of a "remind me to ..." prompt."""
    task_match = TASK_PATTERN.search(prompt)
    time_match = TIME_AT_PATTERN.search(prompt) or TIME_PATTERN.search(prompt)
    date_match = DATE_ON_PATTERN.search(prompt) or DATE_PATTERN.search(prompt)

    task = task_match.group(1).strip() if task_match else None
    time = time_match.group(1).strip().lower() if time_match else UNSPECIFIED
    date = date_match.group(1).lower() if date_match else UNSPECIFIED
    return ParsedCommand(task=task or None, time=time, date=date)


def extract_delete_keyword(prompt: str) -> str:
    """Lower-case the prompt and strip a leading "delete"/"remove" trigger word."""
    keyword = prompt.strip().lower()
    return DELETE_TRIGGER_PATTERN.sub("", keyword).strip()


class ScheduleStore:
    """Thin read/write wrapper around the schedules collection."""

    def __init__(self, client_factory: Callable[[], Any], collection: str = "schedules"):
        self._client_factory = client_factory
        self._client = None
        self.collection_name = collection

    @property
    def collection(self):
        if self._client is None:
            self._client = self._client_factory()
        return self._client.collection(self.collection_name)

    def add(self, event: ScheduleEvent) -> ScheduleEvent:
        if event.created_at is None:
            event.created_at = datetime.now(timezone.utc)
        try:
            _, doc_ref = self.collection.add(event.to_dict())
        except Exception as e:
            raise ScheduleStoreError(f"Failed to add schedule event: {e}") from e
        event.id = doc_ref.id
        return event

    def list_events(self, newest_first: bool = False) -> List[ScheduleEvent]:
        try:
            query = self.collection
            if newest_first:
                query = query.order_by("createdAt", direction=firestore.Query.DESCENDING)
            return [ScheduleEvent.from_dict(doc.to_dict() or {}, id=doc.id) for doc in query.stream()]
        except Exception as e:
            raise ScheduleStoreError(f"Failed to list schedule events: {e}") from e

    def find(self, keyword: str) -> List[ScheduleEvent]:
        """Events whose stored ``task_lower`` contains ``keyword``."""
        return [e for e in self.list_events() if keyword in e.task_lower]

    def delete(self, event_id: str) -> None:
        try:
            self.collection.document(event_id).delete()
        except Exception as e:
            raise ScheduleStoreError(f"Failed to delete schedule event {event_id}: {e}") from e


class ScheduleService:
    """Turns schedule prompts into store operations and reply messages."""

    def __init__(self, store: ScheduleStore):
        self.store = store

    def handle_prompt(self, prompt: str) -> str:
        """List the schedule or add a new event, depending on the prompt."""
        if is_list_request(prompt):
            return self.list_schedule()
        return self.add_from_prompt(prompt)

    def list_schedule(self) -> str:
        events = self.store.list_events(newest_first=True)
        if not events:
            return "Your schedule is empty."
        lines = "\n".join(e.describe() for e in events)
        return f"Here are your upcoming events:\n\n{lines}"

    def add_from_prompt(self, prompt: str) -> str:
        parsed = parse_schedule_command(prompt)
        if not parsed.task:
            return "Could not parse your scheduling command."

        event = self.store.add(ScheduleEvent(task=parsed.task, time=parsed.time, date=parsed.date))
        logger.info(f"Schedule event added: {event.id} '{event.task}'")
        return f'Added "{event.task}" at {event.time} on {event.date}.'

    def delete_by_id(self, event_id: str) -> str:
        self.store.delete(event_id)
        logger.info(f"Schedule event deleted: {event_id}")
        return "Event deleted successfully."

    def delete_matching(self, prompt: str) -> str:
        """Fuzzy delete: exactly one match is deleted, several are listed for the caller."""
        keyword = extract_delete_keyword(prompt)
        if not keyword:
            return "Please tell me which event to delete."

        matches = self.store.find(keyword)
        if not matches:
            return f'No events found containing "{keyword}".'

        if len(matches) == 1:
            event = matches[0]
            self.store.delete(event.id)
            logger.info(f"Schedule event deleted: {event.id} '{event.task}'")
            return f'Deleted "{event.task}".'

        listing = "\n".join(
            f"{idx}. {event.describe()} (ID: {event.id})" for idx, event in enumerate(matches, 1)
        )
        return f"I found multiple matches:\n\n{listing}\n\nPlease provide the specific ID to delete."


def firestore_client_factory(firebase_config) -> Callable[[], Any]:
    """Build a factory that creates the Firestore client on first use."""
    def create():
        from google.oauth2 import service_account

        if firebase_config.configured:
            credentials = service_account.Credentials.from_service_account_info(
                firebase_config.service_account_info()
            )
            return firestore.Client(project=firebase_config.project_id, credentials=credentials)
        # Application default credentials (e.g. on Cloud Run)
        return firestore.Client()
    return create
