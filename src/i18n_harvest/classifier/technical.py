"""
Technical-content detectors.

URLs, file paths, environment variables, identifiers, hashes, colors,
query strings, versions, date-format tokens and numeric patterns.
"""

from __future__ import annotations

import re

FILE_EXTENSIONS: frozenset[str] = frozenset(
    {
        # Web
        "html", "htm", "css", "scss", "sass", "less", "js", "jsx", "ts", "tsx",
        "vue", "svelte", "json", "xml", "yaml", "yml", "toml", "md", "mdx",
        # Images
        "jpg", "jpeg", "png", "gif", "svg", "webp", "ico", "bmp", "tiff", "avif",
        # Documents
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "rtf", "csv",
        # Archives
        "zip", "rar", "7z", "tar", "gz", "bz2", "xz",
        # Media
        "mp3", "mp4", "wav", "ogg", "webm", "avi", "mov", "mkv", "flac", "aac",
        # Code
        "py", "rb", "php", "java", "c", "cpp", "h", "hpp", "cs", "go", "rs",
        "swift", "kt", "scala", "clj", "ex", "exs", "erl", "hs", "lua", "pl",
        "r", "sql",
        # Config
        "env", "ini", "cfg", "conf", "config", "lock", "log",
        # Other
        "woff", "woff2", "ttf", "otf", "eot", "map", "min",
    }
)

PROTOCOL_PREFIXES: tuple[str, ...] = (
    "http://", "https://", "ftp://", "sftp://", "ssh://", "git://",
    "mailto:", "tel:", "sms:", "file://", "data:", "blob:",
    "ws://", "wss://", "irc://", "magnet:", "javascript:",
)

TECHNICAL_ABBREVIATIONS: frozenset[str] = frozenset(
    {
        "http", "https", "ftp", "sftp", "ssh", "tcp", "udp", "ip", "dns", "ssl",
        "tls", "smtp", "imap", "pop3", "ldap", "oauth", "jwt", "api", "rest",
        "graphql", "grpc", "webdav", "websocket", "ws", "wss",
        "json", "xml", "html", "css", "csv", "pdf", "svg", "png", "jpg", "gif",
        "webp",
        "sql", "nosql", "mysql", "postgresql", "mongodb", "redis", "sqlite",
        "oracle",
        "npm", "yarn", "pnpm", "bun", "node", "deno", "php", "python", "ruby",
        "java", "golang", "rust", "swift", "kotlin", "typescript", "javascript",
        "aws", "gcp", "azure", "docker", "kubernetes", "k8s", "ci", "cd", "devops",
        "uuid", "guid", "id", "url", "uri", "urn", "utf", "ascii", "unicode",
        "base64", "md5", "sha", "sha256", "sha512", "aes", "rsa", "hmac", "cors",
        "csrf", "xss",
    }
)

_WWW = re.compile(r"^www\.", re.IGNORECASE)
_DOMAIN_PATH = re.compile(r"^[a-z0-9][a-z0-9.-]*\.[a-z]{2,}(/\S*)?$", re.IGNORECASE)
_ROOT_PATH = re.compile(r"^/[a-z0-9_-]+(/[a-z0-9_-]+)*/?$", re.IGNORECASE)

_EXTENSION = re.compile(r"\.([a-z0-9]+)$", re.IGNORECASE)
_RELATIVE_PATH_START = re.compile(r"^[./\\]")
_PATH_SEPARATOR = re.compile(r"[/\\]")
_WINDOWS_PATH = re.compile(r"^[A-Z]:[/\\]", re.IGNORECASE)
_UNIX_PATH = re.compile(r"^/[a-z0-9_-]+", re.IGNORECASE)

_ENV_VARIABLE = re.compile(r"^(\$\{?[A-Za-z_][A-Za-z0-9_]*\}?|%[A-Za-z_][A-Za-z0-9_]*%|process\.env\.\w+)$")

_UUID = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_HEX_STRING = re.compile(r"^[0-9a-f]{16,}$", re.IGNORECASE)
_BASE64 = re.compile(r"^[A-Za-z0-9+/=]{20,}$")
_VOWEL_PAIR = re.compile(r"[aeiou]{2,}", re.IGNORECASE)
_MIXED_ID = re.compile(r"^[a-z0-9_-]{8,}$", re.IGNORECASE)
_WORD_THEN_DIGITS = re.compile(r"^[a-z]+\d+$", re.IGNORECASE)
_DIGITS_THEN_WORD = re.compile(r"^\d+[a-z]+$", re.IGNORECASE)
_HEX_COLOR = re.compile(r"^#[0-9a-f]{3,8}$", re.IGNORECASE)

_QUERY_PARAM = re.compile(r"^[?&]?[a-z_][a-z0-9_]*=[^&]*", re.IGNORECASE)
_QUERY_STRING = re.compile(r"^([a-z_][a-z0-9_]*=[^&]*&)+[a-z_][a-z0-9_]*=[^&]*$", re.IGNORECASE)

_VERSION = re.compile(r"^v?\d+\.\d+(\.\d+)?(-[a-z0-9.-]+)?$", re.IGNORECASE)
_DATE_FORMAT = re.compile(r"^[YMDHhmsaAzZ\-/:.\s]+$")
_DATE_FORMAT_TOKEN = re.compile(r"[YMDHhms]")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2})?")

_PHONE = re.compile(r"^[+]?\d[\d\s()-]{6,}$")
_CARD = re.compile(r"^\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{4}$")
_SEPARATED_NUMBER = re.compile(r"^\d[\d\s.,'-]*\d$")


def is_url(text: str) -> bool:
    """Check for absolute URLs, bare domains and root-relative paths."""
    if not text:
        return False
    if text.lower().startswith(PROTOCOL_PREFIXES):
        return True
    return bool(_WWW.match(text) or _DOMAIN_PATH.match(text) or _ROOT_PATH.match(text))


def is_file_path(text: str) -> bool:
    """Check for file names with known extensions and path-like strings."""
    if not text:
        return False
    extension = _EXTENSION.search(text)
    if extension and extension.group(1).lower() in FILE_EXTENSIONS:
        return True
    if _RELATIVE_PATH_START.match(text) and _PATH_SEPARATOR.search(text):
        return True
    if _WINDOWS_PATH.match(text):
        return True
    return bool(_UNIX_PATH.match(text) and "/" in text)


def is_environment_variable(text: str) -> bool:
    """Check for ``$HOME``, ``${API_URL}``, ``%APPDATA%`` and ``process.env.X``."""
    return bool(_ENV_VARIABLE.match(text))


def is_uuid(text: str) -> bool:
    return bool(_UUID.match(text))


def is_hex_color(text: str) -> bool:
    return bool(_HEX_COLOR.match(text))


def is_technical_identifier(text: str) -> bool:
    """Check for UUIDs, hashes, base64 blobs and long mixed alphanumeric ids."""
    if not text:
        return False
    if is_uuid(text) or _HEX_STRING.match(text):
        return True
    if _BASE64.match(text) and not _VOWEL_PAIR.search(text):
        return True
    if (
        _MIXED_ID.match(text)
        and any(char.isdigit() for char in text)
        and re.search(r"[a-z]", text, re.IGNORECASE)
    ):
        return not (_WORD_THEN_DIGITS.match(text) or _DIGITS_THEN_WORD.match(text))
    return False


def is_query_string(text: str) -> bool:
    if not text:
        return False
    return bool(_QUERY_PARAM.match(text) or _QUERY_STRING.match(text))


def is_version_number(text: str) -> bool:
    """Check for versions such as ``1.0.0``, ``v1.2`` or ``1.0.0-beta.1``."""
    return bool(_VERSION.match(text))


def is_date_time_format(text: str) -> bool:
    """Check for format tokens (``YYYY-MM-DD``) and ISO dates."""
    if not text:
        return False
    if _DATE_FORMAT.match(text) and _DATE_FORMAT_TOKEN.search(text):
        return True
    return bool(_ISO_DATE.match(text))


def is_numeric_pattern(text: str) -> bool:
    """Check for phone numbers, card numbers and separated digit runs."""
    if not text:
        return False
    if _PHONE.match(text) or _CARD.match(text):
        return True
    return bool(_SEPARATED_NUMBER.match(text) and not re.search(r"[a-zA-Z]", text))


def is_technical_abbreviation(text: str) -> bool:
    return text.strip().lower() in TECHNICAL_ABBREVIATIONS


def is_technical_content(text: str) -> bool:
    """Entry point for technical-content detection."""
    if not text:
        return False
    return (
        is_url(text)
        or is_file_path(text)
        or is_environment_variable(text)
        or is_technical_identifier(text)
        or is_hex_color(text)
        or is_query_string(text)
        or is_version_number(text)
        or is_date_time_format(text)
        or is_numeric_pattern(text)
        or (not re.search(r"\s", text) and is_technical_abbreviation(text))
    )
