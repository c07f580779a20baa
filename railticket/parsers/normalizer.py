"""Turn raw email content (plain, HTML, quoted-printable) into searchable prose."""

import re


_STYLE_BLOCK = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
_SCRIPT_BLOCK = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_NUMERIC_ENTITY = re.compile(r"&#\d+;")
_QP_SOFT_BREAK = re.compile(r"=\r?\n")
_QP_ESCAPES = re.compile(r"(?:=[0-9A-F]{2})+", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

# Order matters: &amp; is decoded after &nbsp; so "&amp;nbsp;" stays literal
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def _decode_qp_escapes(match: re.Match) -> str:
    # A run of escapes is one byte sequence; non-UTF-8 bytes are read as Latin-1
    raw = bytes.fromhex(match.group(0).replace("=", ""))
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def normalize_email_text(raw: str) -> str:
    """
    Strip markup and transfer-encoding artifacts from an email body.

    Steps, in order: drop <style> and <script> blocks, replace tags with a
    space, decode the common character entities (numeric references are
    dropped), undo quoted-printable soft breaks, decode runs of =XX escapes
    as UTF-8 (Latin-1 when invalid), and collapse whitespace runs to a single
    space.

    Args:
        raw: Uploaded file content

    Returns:
        Normalized text. Never raises; an empty input gives an empty string.
    """
    text = _STYLE_BLOCK.sub("", raw)
    text = _SCRIPT_BLOCK.sub("", text)
    text = _TAG.sub(" ", text)

    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    text = _NUMERIC_ENTITY.sub("", text)

    text = _QP_SOFT_BREAK.sub("", text)
    text = _QP_ESCAPES.sub(_decode_qp_escapes, text)

    return _WHITESPACE.sub(" ", text)
