"""Display models for Docker entities.

Each model is built from the dict the engine returns for a list call and
exposes the small describe capability the dashboard relies on:
`get_id()`, `get_name()` and `describe()`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

NONE_TAG = "<none>"


class DescribeSection(BaseModel):
    """A titled block of key/value pairs for the describe page."""

    model_config = ConfigDict(frozen=True)

    title: str
    entries: list[tuple[str, str]] = Field(default_factory=list)


class DockerEntityBase(BaseModel):
    """Base class for all Docker display models."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    labels: dict[str, str] = Field(default_factory=dict, description="Engine labels")

    _entity_name: ClassVar[str] = "entity"

    def get_id(self) -> str:
        raise NotImplementedError

    def get_name(self) -> str:
        raise NotImplementedError

    def describe(self) -> list[DescribeSection]:
        raise NotImplementedError

    def _labels_section(self) -> DescribeSection:
        return DescribeSection(title="Labels", entries=sorted(self.labels.items()))


class DockerPort(BaseModel):
    """A published or exposed container port."""

    model_config = ConfigDict(extra="ignore")

    ip: str | None = None
    private_port: int
    public_port: int | None = None
    type: str = "tcp"

    def __str__(self) -> str:
        if self.public_port:
            host = self.ip or "0.0.0.0"
            return f"{host}:{self.public_port}->{self.private_port}/{self.type}"
        return f"{self.private_port}/{self.type}"


class DockerContainer(DockerEntityBase):
    """Container display model."""

    id: str
    image: str = ""
    command: str = ""
    created: int = 0
    status: str = ""
    state: str = ""
    ports: list[DockerPort] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    running: bool = False

    _entity_name: ClassVar[str] = "container"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DockerContainer:
        """Create from an entry of the engine's container list."""
        state = data.get("State") or ""
        return cls(
            id=data["Id"],
            image=data.get("Image") or "",
            command=data.get("Command") or "",
            created=data.get("Created") or 0,
            status=data.get("Status") or "",
            state=state,
            ports=[
                DockerPort(
                    ip=p.get("IP"),
                    private_port=p.get("PrivatePort", 0),
                    public_port=p.get("PublicPort"),
                    type=p.get("Type", "tcp"),
                )
                for p in data.get("Ports") or []
            ],
            names=data.get("Names") or [],
            running=state == "running",
            labels=data.get("Labels") or {},
        )

    @property
    def short_id(self) -> str:
        return self.id[:12]

    @property
    def ports_display(self) -> str:
        return ", ".join(str(p) for p in self.ports)

    @property
    def created_display(self) -> str:
        return format_timestamp(self.created)

    def get_id(self) -> str:
        return self.id

    def get_name(self) -> str:
        if self.names:
            return self.names[0].lstrip("/")
        return self.short_id

    def describe(self) -> list[DescribeSection]:
        return [
            DescribeSection(
                title="Summary",
                entries=[
                    ("Id", self.id),
                    ("Name", self.get_name()),
                    ("Image", self.image),
                    ("Command", self.command),
                    ("Created", self.created_display),
                    ("Status", self.status),
                    ("State", self.state),
                ],
            ),
            DescribeSection(title="Ports", entries=[("Port", str(p)) for p in self.ports]),
            self._labels_section(),
        ]


class DockerImage(DockerEntityBase):
    """Image display model."""

    id: str
    name: str = NONE_TAG
    tag: str = NONE_TAG
    created: int = 0
    size: int = 0

    _entity_name: ClassVar[str] = "image"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DockerImage:
        """Create from an entry of the engine's image list.

        Only the first repo tag is used; images tagged several times show
        once per listing entry, as the engine reports them.
        """
        name, tag = NONE_TAG, NONE_TAG
        repo_tags = data.get("RepoTags") or []
        if repo_tags:
            name, tag = split_repo_tag(repo_tags[0])
        return cls(
            id=data["Id"].removeprefix("sha256:"),
            name=name,
            tag=tag,
            created=data.get("Created") or 0,
            size=data.get("Size") or 0,
            labels=data.get("Labels") or {},
        )

    @property
    def short_id(self) -> str:
        return self.id[:12]

    @property
    def is_dangling(self) -> bool:
        return self.name == NONE_TAG and self.tag == NONE_TAG

    @property
    def created_display(self) -> str:
        return format_timestamp(self.created)

    @property
    def size_display(self) -> str:
        return format_size(self.size)

    def get_full_name(self) -> str:
        """Return `name:tag`, or the id for untagged images."""
        if self.is_dangling:
            return self.id
        return f"{self.name}:{self.tag}"

    def get_id(self) -> str:
        return self.id

    def get_name(self) -> str:
        return self.get_full_name()

    def describe(self) -> list[DescribeSection]:
        return [
            DescribeSection(
                title="Summary",
                entries=[
                    ("Id", self.id),
                    ("Name", self.name),
                    ("Tag", self.tag),
                    ("Created", self.created_display),
                    ("Size", self.size_display),
                ],
            ),
            self._labels_section(),
        ]


class DockerVolume(DockerEntityBase):
    """Volume display model. Volumes are identified by name."""

    name: str
    driver: str = ""
    mountpoint: str = ""
    created_at: str | None = None
    scope: str = ""
    options: dict[str, str] = Field(default_factory=dict)

    _entity_name: ClassVar[str] = "volume"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DockerVolume:
        """Create from an entry of the engine's volume list."""
        return cls(
            name=data["Name"],
            driver=data.get("Driver") or "",
            mountpoint=data.get("Mountpoint") or "",
            created_at=data.get("CreatedAt"),
            scope=data.get("Scope") or "",
            options=data.get("Options") or {},
            labels=data.get("Labels") or {},
        )

    def get_id(self) -> str:
        return self.name

    def get_name(self) -> str:
        return self.name

    def describe(self) -> list[DescribeSection]:
        return [
            DescribeSection(
                title="Summary",
                entries=[
                    ("Name", self.name),
                    ("Driver", self.driver),
                    ("Mountpoint", self.mountpoint),
                    ("Created", self.created_at or "Unknown"),
                    ("Scope", self.scope),
                ],
            ),
            self._labels_section(),
            DescribeSection(title="Options", entries=sorted(self.options.items())),
        ]


class DockerNetwork(DockerEntityBase):
    """Network display model. Networks are identified by name."""

    id: str
    name: str
    driver: str = ""
    created_at: str | None = None
    scope: str = ""
    internal: bool = False
    attachable: bool = False

    _entity_name: ClassVar[str] = "network"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> DockerNetwork:
        """Create from an entry of the engine's network list."""
        return cls(
            id=data.get("Id") or "",
            name=data["Name"],
            driver=data.get("Driver") or "",
            created_at=data.get("Created"),
            scope=data.get("Scope") or "",
            internal=bool(data.get("Internal")),
            attachable=bool(data.get("Attachable")),
            labels=data.get("Labels") or {},
        )

    def get_id(self) -> str:
        return self.name

    def get_name(self) -> str:
        return self.name

    def describe(self) -> list[DescribeSection]:
        return [
            DescribeSection(
                title="Summary",
                entries=[
                    ("Id", self.id),
                    ("Name", self.name),
                    ("Driver", self.driver),
                    ("Created", self.created_at or "Unknown"),
                    ("Scope", self.scope),
                    ("Internal", str(self.internal).lower()),
                    ("Attachable", str(self.attachable).lower()),
                ],
            ),
            self._labels_section(),
        ]


Describable = DockerContainer | DockerImage | DockerVolume | DockerNetwork


class LogStreamOptions(BaseModel):
    """Options for following a container's output."""

    model_config = ConfigDict(frozen=True)

    all: bool = False
    tail: int = 200
    follow: bool = True
    timestamps: bool = False


def split_repo_tag(repo_tag: str) -> tuple[str, str]:
    """Split `registry:5000/name:tag` into name and tag.

    A colon that belongs to a registry port is not a tag separator.
    """
    name, sep, tag = repo_tag.rpartition(":")
    if not sep or "/" in tag:
        return repo_tag, NONE_TAG
    return name, tag


def format_timestamp(epoch: int) -> str:
    """Format a unix timestamp for tables, or "Unknown" when unset."""
    if not epoch:
        return "Unknown"
    return datetime.fromtimestamp(epoch, tz=UTC).strftime("%Y-%m-%d %H:%M:%S")


def format_size(size: int) -> str:
    """Format a byte count using decimal units, as the docker CLI does."""
    value = float(size)
    for unit in ("B", "kB", "MB", "GB", "TB"):
        if value < 1000 or unit == "TB":
            return f"{value:.0f}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1000
    return f"{value:.1f}TB"
