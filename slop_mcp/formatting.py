"""Conversion of loosely specified API identifiers into oapis.org path ids."""

PROTOCOL_PREFIXES = ("http://", "https://")


def format_api_id(api_id: str) -> str:
    """Turn a spec URL into the id the upstream expects.

    Known ids are returned unchanged. URLs lose their protocol and every
    ``/`` becomes ``__``, e.g. ``https://a.b/c/d`` -> ``a.b__c__d``.
    """
    for prefix in PROTOCOL_PREFIXES:
        if api_id.startswith(prefix):
            return api_id[len(prefix):].replace("/", "__")
    return api_id


__all__ = [
    "format_api_id",
]
