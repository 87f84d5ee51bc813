"""Data models for registry responses and resolved image details."""

from dataclasses import dataclass, field
from typing import Any


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


def _require_string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {value!r}")
    return value


def _optional_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string or null, got {value!r}")
    return value


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    """Read a list of strings, treating a missing or null value as empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"'{key}' must be a list of strings, got {value!r}")
    return list(value)


def _string_map(data: dict[str, Any], key: str) -> dict[str, str]:
    """Read a string-to-string mapping, treating a missing or null value as empty."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ValueError(f"'{key}' must be a mapping of strings, got {value!r}")
    return dict(value)


@dataclass
class CatalogResponse:
    """Body of ``GET /v2/_catalog``."""

    repositories: list[str]

    @classmethod
    def from_dict(cls, data: Any) -> "CatalogResponse":
        data = _require_mapping(data, "catalog")
        if "repositories" not in data:
            raise ValueError("'repositories' is missing")
        return cls(repositories=_string_list(data, "repositories"))


@dataclass
class TagListResponse:
    """Body of ``GET /v2/<name>/tags/list``."""

    name: str
    tags: list[str]

    @classmethod
    def from_dict(cls, data: Any) -> "TagListResponse":
        data = _require_mapping(data, "tag list")
        # A repository whose tags were all deleted reports "tags": null
        return cls(name=_require_string(data, "name"), tags=_string_list(data, "tags"))


@dataclass
class ManifestResponse:
    """Image manifest (schema 2), reduced to the config blob reference."""

    config_digest: str

    @classmethod
    def from_dict(cls, data: Any) -> "ManifestResponse":
        data = _require_mapping(data, "manifest")
        config = _require_mapping(data.get("config"), "manifest 'config'")
        return cls(config_digest=_require_string(config, "digest"))


@dataclass
class ContainerConfig:
    """Runtime defaults from the nested ``config`` object of a config blob.

    Field names on the wire are upper camel case (``User``, ``Env``, ``Cmd``,
    ``WorkingDir``, ``Labels``) as in the image config spec.
    """

    user: str | None = None
    env: list[str] = field(default_factory=list)
    cmd: list[str] = field(default_factory=list)
    working_dir: str | None = None
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "ContainerConfig":
        if data is None:
            return cls()
        data = _require_mapping(data, "blob 'config'")
        return cls(
            user=_optional_string(data, "User"),
            env=_string_list(data, "Env"),
            cmd=_string_list(data, "Cmd"),
            working_dir=_optional_string(data, "WorkingDir"),
            labels=_string_map(data, "Labels"),
        )


@dataclass
class ConfigBlobResponse:
    """Image configuration blob referenced by a manifest."""

    architecture: str
    created: str
    config: ContainerConfig

    @classmethod
    def from_dict(cls, data: Any) -> "ConfigBlobResponse":
        data = _require_mapping(data, "config blob")
        return cls(
            architecture=_require_string(data, "architecture"),
            created=_require_string(data, "created"),
            config=ContainerConfig.from_dict(data.get("config")),
        )


@dataclass
class ImageDetails:
    """Resolved metadata for one repository tag."""

    name: str
    tag: str
    user: str | None
    env: list[str]
    cmd: list[str]
    working_dir: str | None
    labels: dict[str, str]
    architecture: str
    created: str  # ISO-8601, exactly as reported by the registry

    @classmethod
    def from_blob(cls, name: str, tag: str, blob: ConfigBlobResponse) -> "ImageDetails":
        return cls(
            name=name,
            tag=tag,
            user=blob.config.user,
            env=blob.config.env,
            cmd=blob.config.cmd,
            working_dir=blob.config.working_dir,
            labels=blob.config.labels,
            architecture=blob.architecture,
            created=blob.created,
        )
