"""
Flattens the endpoint's grounding citations into GroundingSource records.
"""

import logging
from typing import Any, Iterable, List, Optional, Union

from .localization import t
from .schemas import GroundingSource, Language

logger = logging.getLogger(__name__)

# (sub-record key, localized fallback title key), in emission order within an entry
_CITATION_KINDS = (("web", "web_source"), ("maps", "maps_source"))


def _get(record: Any, key: str) -> Any:
    """Reads key from a mapping or an attribute-style SDK object."""
    if record is None:
        return None
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def collect_grounding_sources(
    citations: Optional[Iterable[Any]], language: Union[str, Language] = Language.EN
) -> List[GroundingSource]:
    """
    Builds the ordered list of sources cited by the model.

    Each citation entry may carry a 'web' and/or a 'maps' sub-record; every
    sub-record with a uri yields one source. Entries are not deduplicated.

    Args:
        citations (Optional[Iterable[Any]]): Raw grounding chunks, as dicts or SDK objects.
        language (Union[str, Language]): Language of the fallback titles.

    Returns:
        List[GroundingSource]: Sources in encounter order.
    """
    sources: List[GroundingSource] = []
    for chunk in citations or []:
        for key, fallback_key in _CITATION_KINDS:
            sub_record = _get(chunk, key)
            uri = _get(sub_record, "uri")
            if not uri:
                continue
            title = _get(sub_record, "title") or t(language, fallback_key)
            sources.append(GroundingSource(uri=str(uri), title=str(title)))
    logger.debug("Collected %d grounding source(s).", len(sources))
    return sources
