"""
Resource Reconciler

Merges two independent descriptions of the same resources:
- Grounding citations (the search tool's real URLs, authoritative)
- The model's JSON answer (better titles/descriptions, untrusted URLs)

Rules:
- Only grounded URIs ever reach the final list
- Enrichment updates fields on matches, never adds or reorders
- Matching and dedup use the normalized URI
- The result is never empty
"""

import logging
from typing import Any, Iterable
from urllib.parse import quote

from src.schemas.base import MAX_RESOURCES_PER_TOPIC
from src.schemas.curriculum import CuratedContent, ResourceLink
from src.utils.errors import MalformedResponseError
from src.utils.gemini_client import GroundingCitation
from src.utils.urls import (
    clean_title,
    normalize_url,
    source_hostname,
    youtube_thumbnail,
)
from src.utils.validation import decode_json_payload

logger = logging.getLogger(__name__)

GROUNDED_DESCRIPTION = "Recommended resource found via Google Search."

# Bare platform homepages produced by imprecise grounding
ROOT_DOMAIN_URIS: frozenset[str] = frozenset({
    "https://www.youtube.com/",
    "https://youtube.com/",
    "https://www.google.com/",
})

# Model-proposed titles at or above this length are ignored
MAX_ENRICHED_TITLE_LENGTH = 100


def resources_from_grounding(
    citations: Iterable[GroundingCitation],
    topic_title: str,
) -> list[ResourceLink]:
    """
    Build the primary resource list from grounding citations.

    Citations missing a URI or title are skipped; repeated normalized
    URIs keep their first occurrence.
    """
    seen: set[str] = set()
    resources: list[ResourceLink] = []

    for citation in citations:
        if not citation.uri or not citation.title:
            continue
        key = normalize_url(citation.uri)
        if key in seen:
            continue
        seen.add(key)
        resources.append(ResourceLink(
            title=clean_title(citation.title, citation.uri, topic_title),
            uri=citation.uri,
            source=source_hostname(citation.uri),
            thumbnail=youtube_thumbnail(citation.uri),
            description=GROUNDED_DESCRIPTION,
        ))

    return resources


def _enrich_one(
    resource: ResourceLink,
    item: dict[str, Any],
    topic_title: str,
) -> ResourceLink:
    update: dict[str, Any] = {"description": item["description"].strip()}
    title = item.get("title")
    if isinstance(title, str) and title and len(title) < MAX_ENRICHED_TITLE_LENGTH:
        update["title"] = clean_title(title, item["uri"], topic_title)
    return resource.model_copy(update=update)


def apply_enrichment(
    resources: list[ResourceLink],
    response_text: str | None,
    topic_title: str,
) -> list[ResourceLink]:
    """
    Overlay the model's descriptions and titles onto grounded resources.

    Items that don't match a grounded resource by normalized URI are
    dropped. A response that fails to decode leaves ``resources`` as-is.
    """
    if not resources:
        return resources

    try:
        parsed = decode_json_payload(response_text)
    except MalformedResponseError as e:
        logger.debug(f"Curator enrichment skipped: {e}")
        return resources

    if not isinstance(parsed, list):
        logger.debug("Curator enrichment skipped: response is not a JSON array")
        return resources

    index = {normalize_url(r.uri): i for i, r in enumerate(resources)}
    enriched = list(resources)

    for item in parsed:
        if not isinstance(item, dict):
            continue
        uri = item.get("uri")
        description = item.get("description")
        if not isinstance(uri, str) or not uri:
            continue
        if not isinstance(description, str) or not description.strip():
            continue
        position = index.get(normalize_url(uri))
        if position is None:
            continue
        enriched[position] = _enrich_one(enriched[position], item, topic_title)

    return enriched


def fallback_search_resources(topic_title: str, context: str) -> list[ResourceLink]:
    """Two search-results links used when grounding returned nothing."""
    google_query = quote(f"{topic_title} {context} tutorial", safe="")
    youtube_query = quote(f"{topic_title} tutorial", safe="")
    return [
        ResourceLink(
            title=f'Search Google for "{topic_title}"',
            uri=f"https://www.google.com/search?q={google_query}",
            source="google.com",
            description="No specific verified links found. Click to search manually.",
        ),
        ResourceLink(
            title=f'Search YouTube for "{topic_title}"',
            uri=f"https://www.youtube.com/results?search_query={youtube_query}",
            source="youtube.com",
            description="Find video tutorials on YouTube.",
        ),
    ]


def drop_root_domains(resources: list[ResourceLink]) -> list[ResourceLink]:
    """Remove bare platform homepages, but only from lists longer than two."""
    if len(resources) <= 2:
        return resources
    return [r for r in resources if r.uri.lower() not in ROOT_DOMAIN_URIS]


def reconcile_resources(
    citations: Iterable[GroundingCitation],
    response_text: str | None,
    topic_title: str,
    context: str,
    max_resources: int = MAX_RESOURCES_PER_TOPIC,
) -> list[ResourceLink]:
    """
    Full reconciliation: grounding → enrichment → fallback → root-domain
    filter → truncate. Always returns between 1 and ``max_resources`` items.
    """
    resources = resources_from_grounding(citations, topic_title)
    resources = apply_enrichment(resources, response_text, topic_title)

    if not resources:
        logger.info(f"No grounded resources for '{topic_title}', using search fallback")
        resources = fallback_search_resources(topic_title, context)

    # Dedup leaves at most two homepage keys, so filtering a list of three
    # or more never empties it.
    resources = drop_root_domains(resources)

    return resources[:max_resources]


def build_curated_content(topic_title: str, resources: list[ResourceLink]) -> CuratedContent:
    return CuratedContent(
        summary=f"Here are {len(resources)} curated resources for {topic_title}.",
        resources=resources,
    )


def failure_content(topic_title: str) -> CuratedContent:
    """Degraded result used when the curator call itself failed."""
    query = quote(topic_title, safe="")
    return CuratedContent(
        summary="Could not curate specific resources due to an error.",
        resources=[
            ResourceLink(
                title=f'Search "{topic_title}" on Google',
                uri=f"https://www.google.com/search?q={query}",
                source="google.com",
                description="Manual search fallback.",
            )
        ],
    )
