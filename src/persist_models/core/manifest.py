import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .parser_impl import DEFAULT_CLOSE_MARKER, DEFAULT_OPEN_MARKERS

MANIFEST_NAME = "persist_models.toml"
MODEL_FILE_SUFFIX = ".persistentmodels"


@dataclass
class ParserConfig:
    """Markers that delimit an embedded model block."""

    open_markers: list[str] = field(default_factory=lambda: list(DEFAULT_OPEN_MARKERS))
    close_marker: str = DEFAULT_CLOSE_MARKER


@dataclass
class FilesConfig:
    """Where model files live and which ones hold embedded blocks."""

    paths: list[str] = field(default_factory=list)  # files or directories, relative to the manifest
    model_names: list[str] = field(default_factory=lambda: ["models"])
    embedded_suffixes: list[str] = field(default_factory=lambda: [".hs"])


@dataclass
class ModelsManifest:
    """
    Project configuration from persist_models.toml.

    Example:

        [parser]
        open_markers = ["[persistLowerCase|", "[persistUpperCase|"]
        close_marker = "|]"

        [files]
        paths = ["config/models"]
        model_names = ["models"]
        embedded_suffixes = [".hs"]
    """

    root: Path = field(default_factory=Path.cwd)
    parser: ParserConfig = field(default_factory=ParserConfig)
    files: FilesConfig = field(default_factory=FilesConfig)

    def is_embedded(self, path: Path) -> bool:
        """Check if ``path`` holds an embedded block rather than a models file."""
        return path.suffix in self.files.embedded_suffixes

    def is_model_file(self, path: Path) -> bool:
        """Check if a file found in a directory should be parsed."""
        return (
            path.name in self.files.model_names
            or path.suffix == MODEL_FILE_SUFFIX
            or self.is_embedded(path)
        )

    def resolved_paths(self) -> list[Path]:
        return [self.root / p for p in self.files.paths]


def _string_list(section: dict, key: str, default: list[str]) -> list[str]:
    value = section.get(key, default)
    if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
        raise ConfigError(f"'{key}' must be a list of non-empty strings")
    return list(value)


def _string(section: dict, key: str, default: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value


def load_manifest(path: Path) -> ModelsManifest:
    """
    Load a persist_models.toml manifest.

    Missing sections and keys fall back to defaults.

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    parser_data = data.get("parser", {})
    files_data = data.get("files", {})

    parser_config = ParserConfig(
        open_markers=_string_list(parser_data, "open_markers", list(DEFAULT_OPEN_MARKERS)),
        close_marker=_string(parser_data, "close_marker", DEFAULT_CLOSE_MARKER),
    )
    if not parser_config.open_markers:
        raise ConfigError("'open_markers' must not be empty")

    files_config = FilesConfig(
        paths=_string_list(files_data, "paths", []),
        model_names=_string_list(files_data, "model_names", ["models"]),
        embedded_suffixes=_string_list(files_data, "embedded_suffixes", [".hs"]),
    )

    return ModelsManifest(
        root=path.parent,
        parser=parser_config,
        files=files_config,
    )


def find_manifest(start: Path) -> Path | None:
    """Walk up from ``start`` looking for persist_models.toml."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.exists():
            return candidate
    return None
