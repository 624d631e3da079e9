"""MediaWiki title parsing against site metadata."""

import re
from functools import lru_cache
from typing import Optional, Pattern

from ..errors import InvalidTitleError
from ..models import SiteInfo

REPLACEMENT_CHAR = "�"


def to_db_key(text: str) -> str:
    """Convert a title to its db key form (spaces become underscores)."""
    return text.replace(" ", "_")


@lru_cache(maxsize=64)
def _legal_chars_pattern(legaltitlechars: str) -> Optional[Pattern]:
    try:
        return re.compile(f"[{legaltitlechars}]")
    except re.error:
        return None


def _namespace_key(name: str) -> str:
    return name.replace("_", " ").strip().lower()


def _lookup_namespace(prefix: str, siteinfo: SiteInfo) -> Optional[int]:
    key = _namespace_key(prefix)
    if not key:
        return None
    for ns in siteinfo.namespaces.values():
        if ns.id == 0:
            continue
        if _namespace_key(ns.name) == key:
            return ns.id
        if ns.canonical and _namespace_key(ns.canonical) == key:
            return ns.id
    for alias, ns_id in siteinfo.namespacealiases.items():
        if _namespace_key(alias) == key:
            return ns_id
    return None


class Title:
    """A parsed page title."""

    def __init__(self, namespace: int, dbkey: str, siteinfo: SiteInfo) -> None:
        self.namespace = namespace
        self.dbkey = dbkey
        self.siteinfo = siteinfo

    @classmethod
    def from_text(cls, text: str, siteinfo: SiteInfo) -> "Title":
        """
        Parse a title string.

        Raises:
            InvalidTitleError: if the text has invalid encoding, is empty or
                contains characters the site does not allow
        """
        if REPLACEMENT_CHAR in text:
            raise InvalidTitleError(text, "title-invalid-utf8")

        key = re.sub(r"_+", "_", to_db_key(text)).strip("_")
        if not key:
            raise InvalidTitleError(text, "title-invalid-empty")

        if siteinfo.legaltitlechars:
            pattern = _legal_chars_pattern(siteinfo.legaltitlechars)
            # Non-ASCII ranges in legaltitlechars are byte ranges; check ASCII only
            if pattern is not None and any(
                ord(ch) < 128 and not pattern.match(ch) for ch in key
            ):
                raise InvalidTitleError(text, "title-invalid-characters")

        namespace = 0
        if ":" in key:
            prefix, rest = key.split(":", 1)
            ns_id = _lookup_namespace(prefix, siteinfo)
            rest = rest.lstrip("_")
            if ns_id is not None and rest:
                namespace = ns_id
                key = rest

        ns_info = siteinfo.namespaces.get(namespace)
        case = ns_info.case if ns_info else siteinfo.case
        if case == "first-letter":
            key = key[0].upper() + key[1:]

        return cls(namespace, key, siteinfo)

    @property
    def prefixed_dbkey(self) -> str:
        """Db key including the localized namespace prefix."""
        if self.namespace == 0:
            return self.dbkey
        ns_info = self.siteinfo.namespaces.get(self.namespace)
        prefix = ns_info.name if ns_info and ns_info.name else str(self.namespace)
        return f"{to_db_key(prefix)}:{self.dbkey}"

    @property
    def prefixed_text(self) -> str:
        return self.prefixed_dbkey.replace("_", " ")

    def __repr__(self) -> str:
        return f"Title({self.namespace}, {self.dbkey!r})"
