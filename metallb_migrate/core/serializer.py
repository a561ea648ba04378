"""YAML/JSON rendering and parsing of multi-document resource text.

Each resource is rendered as its own document; documents are separated by a
line holding only ``---``.
"""

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import structlog
import yaml

from ..constants import DOCUMENT_BOUNDARY
from ..models.enums import OutputFormat
from .exceptions import ResourceIOError, UnrecognizedSchemaError

logger = structlog.get_logger()

JSON_INDENT = 4

_BOUNDARY_RE = re.compile(rf"^{re.escape(DOCUMENT_BOUNDARY)}[ \t]*$", re.MULTILINE)

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"

# (kind, manifests) pairs in output order
ResourceGroup = tuple[str, list[dict[str, Any]]]


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader without the YAML 1.1 base-60 number forms.

    Plain scalars such as a BGP community `64512:1` stay strings instead of
    resolving to sexagesimal integers.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DocumentLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
DocumentLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9_]+(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


def render_document(manifest: dict[str, Any], output_format: OutputFormat) -> str:
    """Render one manifest, always ending with a newline.

    YAML output is readable by both ``DocumentLoader`` and plain YAML 1.1
    loaders: strings that look like numbers to either are quoted.
    """
    if output_format is OutputFormat.JSON:
        return json.dumps(manifest, indent=JSON_INDENT) + "\n"
    return yaml.safe_dump(manifest, sort_keys=False, default_flow_style=False)


def render_documents(manifests: Iterable[dict[str, Any]], output_format: OutputFormat) -> str:
    """Render manifests as boundary-separated documents, without a trailing boundary."""
    separator = f"{DOCUMENT_BOUNDARY}\n"
    return separator.join(render_document(manifest, output_format) for manifest in manifests)


def split_documents(text: str) -> list[str]:
    """Split text on line-leading boundaries, dropping blank documents."""
    return [document for document in _BOUNDARY_RE.split(text) if document.strip()]


def parse_document(text: str, source: str | None = None) -> dict[str, Any]:
    """Decode one YAML or JSON document into a mapping.

    Documents starting with ``{`` are decoded as JSON, everything else as YAML.
    """
    if text.lstrip().startswith("{"):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise UnrecognizedSchemaError(f"cannot decode JSON document: {e}", source) from e
    else:
        try:
            data = yaml.load(text, Loader=DocumentLoader)  # nosec B506 - SafeLoader subclass
        except yaml.YAMLError as e:
            raise UnrecognizedSchemaError(f"cannot decode document: {e}", source) from e
    if not isinstance(data, dict):
        raise UnrecognizedSchemaError(
            f"document is a {type(data).__name__}, expected a mapping", source
        )
    return data


def write_to_stream(
    groups: Iterable[ResourceGroup], stream: TextIO, output_format: OutputFormat
) -> None:
    """Write all non-empty groups to one stream, separating groups with a boundary."""
    first = True
    for _kind, manifests in groups:
        if not manifests:
            continue
        if not first:
            stream.write(f"{DOCUMENT_BOUNDARY}\n")
        stream.write(render_documents(manifests, output_format))
        first = False
    stream.flush()


def write_to_directory(
    groups: Iterable[ResourceGroup], directory: Path | str, output_format: OutputFormat
) -> list[Path]:
    """Write one ``<Kind>.<ext>`` file per non-empty group.

    Returns:
        Paths of the files written, in group order
    """
    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ResourceIOError(f"cannot create destination directory {directory}: {e}") from e

    written: list[Path] = []
    for kind, manifests in groups:
        if not manifests:
            continue
        path = directory / f"{kind}.{output_format.extension}"
        try:
            path.write_text(render_documents(manifests, output_format), encoding="utf-8")
        except OSError as e:
            raise ResourceIOError(f"cannot write destination file {path}: {e}") from e
        logger.info("Wrote resource file", kind=kind, path=str(path), count=len(manifests))
        written.append(path)
    return written
