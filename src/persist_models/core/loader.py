import logging
from dataclasses import dataclass
from pathlib import Path

from . import ir
from .errors import ParseError
from .manifest import ModelsManifest
from .parser_impl import parse_embedded_models_block, parse_models_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelsFileResult:
    """A parsed file together with where it came from."""

    file: Path
    models: ir.ModelsFile
    embedded: bool = False


def load_models_file(
    path: Path,
    manifest: ModelsManifest | None = None,
    embedded: bool | None = None,
) -> ModelsFileResult:
    """
    Read and parse a single file.

    Args:
        path: File to parse
        manifest: Project configuration; defaults apply when omitted
        embedded: Force embedded-block (True) or full-file (False) parsing;
            None picks by file suffix

    Returns:
        ModelsFileResult for the file

    Raises:
        ParseError: With the file path in its context
    """
    manifest = manifest or ModelsManifest()
    if embedded is None:
        embedded = manifest.is_embedded(path)

    text = path.read_text(encoding="utf-8")

    try:
        if embedded:
            models = parse_embedded_models_block(
                text,
                path,
                open_markers=manifest.parser.open_markers,
                close_marker=manifest.parser.close_marker,
            )
        else:
            models = parse_models_file(text, path)
    except ParseError as e:
        logger.warning("Failed to parse %s: %s", path, e.message)
        raise

    logger.debug("Loaded %s (%d entities)", path, len(models.entities))
    return ModelsFileResult(file=path, models=models, embedded=embedded)


def collect_model_files(paths: list[Path], manifest: ModelsManifest | None = None) -> list[Path]:
    """
    Expand directories into the model files they contain.

    Files inside a directory are taken when their name is one of the
    manifest's ``model_names`` (``models`` by default, the usual
    ``config/models`` layout), they end in ``.persistentmodels``, or they
    have one of the manifest's embedded suffixes. Hidden files and anything
    under a hidden directory are skipped. Explicit file paths are kept as
    given.
    """
    manifest = manifest or ModelsManifest()
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if _is_hidden(child.relative_to(path)):
                    continue
                if child.is_file() and manifest.is_model_file(child):
                    files.append(child)
        else:
            files.append(path)
    return files


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def parse_model_files(
    files: list[Path],
    manifest: ModelsManifest | None = None,
    embedded: bool | None = None,
) -> list[ModelsFileResult]:
    """
    Parse model files in order.

    Args:
        files: Files or directories to parse
        manifest: Project configuration
        embedded: Force the parse mode for every file

    Returns:
        One ModelsFileResult per file

    Raises:
        ParseError: On the first file that fails
    """
    return [
        load_models_file(f, manifest, embedded) for f in collect_model_files(files, manifest)
    ]
