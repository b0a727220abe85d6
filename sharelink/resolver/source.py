# Sharelink Metadata Source
# Subscriptions and applications behind the desired link set

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import BaseModel, Field, ValidationError

from sharelink.exceptions import ApplicationNotFoundError, MetadataError


@dataclass(frozen=True)
class Subscription:
    """An account's subscription to an application, delivered into folder."""

    account: str
    folder: str
    application: str


@dataclass(frozen=True)
class Application:
    """An application and its free-text notes."""

    name: str
    notes: str = ""


class SubscriptionSource(Protocol):
    """Where subscriptions and applications come from."""

    def subscriptions(self, account: str) -> Iterable[Subscription]:
        """Subscriptions of an account, in a stable order."""
        ...

    def application(self, name: str) -> Application:
        """Look up an application; raise ApplicationNotFoundError if unknown."""
        ...


class InMemorySubscriptionSource:
    """Subscription source backed by plain Python collections."""

    def __init__(
        self,
        subscriptions: Iterable[Subscription] = (),
        applications: Iterable[Application] = (),
    ):
        self._subscriptions = list(subscriptions)
        self._applications = {app.name: app for app in applications}

    def subscriptions(self, account: str) -> Iterator[Subscription]:
        return (sub for sub in self._subscriptions if sub.account == account)

    def application(self, name: str) -> Application:
        try:
            return self._applications[name]
        except KeyError:
            raise ApplicationNotFoundError(name) from None


class _ApplicationEntry(BaseModel):
    notes: str = ""


class _SubscriptionEntry(BaseModel):
    account: str
    folder: str
    application: str


class _MetadataDocument(BaseModel):
    applications: dict[str, _ApplicationEntry] = Field(default_factory=dict)
    subscriptions: list[_SubscriptionEntry] = Field(default_factory=list)


class YamlSubscriptionSource(InMemorySubscriptionSource):
    """
    Subscription source read from a YAML file.

    The document has the shape::

        applications:
          projects:
            notes: "share=/srv/shares/projects"
        subscriptions:
          - account: alice
            folder: /projects
            application: projects

    A missing file means no subscriptions.
    """

    def __init__(self, path: Path):
        """
        Load metadata from path.

        Raises:
            MetadataError: If the file cannot be read or is malformed.
        """
        self.path = Path(path).expanduser()
        document = self._load(self.path)
        super().__init__(
            subscriptions=(Subscription(s.account, s.folder, s.application) for s in document.subscriptions),
            applications=(Application(name, entry.notes) for name, entry in document.applications.items()),
        )

    @staticmethod
    def _load(path: Path) -> _MetadataDocument:
        if not path.exists():
            return _MetadataDocument()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise MetadataError(f"Could not read metadata file {path}: {e}") from e

        if data is None:
            return _MetadataDocument()

        try:
            return _MetadataDocument.model_validate(data)
        except ValidationError as e:
            raise MetadataError(f"Invalid metadata file {path}: {e}") from e
