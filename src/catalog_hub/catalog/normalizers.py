"""
Normalize raw upstream records into CatalogEntry.

Every normalizer is a pure function: no I/O, no clock reads. Missing optional
upstream fields are replaced with documented defaults ("Unknown", "", 0,
empty tags, epoch) so nothing null leaks into the canonical shape. A record
that cannot be mapped at all raises NormalizationError.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Any, Optional

from .base import CatalogEntry, generate_entry_id, to_utc_datetime
from .errors import NormalizationError

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

Normalizer = Callable[[dict[str, Any], str], CatalogEntry]

# Dataset domain inferred from tags, first match wins
_DATASET_CATEGORIES: tuple[tuple[str, frozenset[str]], ...] = (
    ("vision", frozenset({
        "vision", "computer vision", "computer-vision", "image", "images",
        "image classification", "image-classification", "object-detection",
        "image-segmentation", "video", "modality:image", "modality:video",
    })),
    ("nlp", frozenset({
        "nlp", "text", "text classification", "text-classification",
        "sentiment analysis", "sentiment-analysis", "question-answering",
        "language-modeling", "translation", "modality:text",
    })),
    ("audio", frozenset({"audio", "speech", "speech-recognition", "modality:audio"})),
    ("tabular", frozenset({
        "tabular", "time series", "time-series", "finance", "classification",
        "regression", "modality:tabular", "modality:timeseries",
    })),
)

_OPEN_SOURCE_LICENSES = ("mit", "apache-2.0", "gpl", "bsd", "cc0", "unlicense", "mpl")
_OPEN_SOURCE_TOPICS = frozenset({"open-source", "opensource", "oss"})


def _require_mapping(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise NormalizationError(f"Expected an object, got {type(raw).__name__}")
    return raw


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _count(value: Any) -> int:
    """Non-negative integer count; anything unusable becomes 0."""
    if isinstance(value, bool):
        return 0
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _string_tags(values: Any) -> tuple[str, ...]:
    """Deduplicate tags while preserving display order."""
    if not isinstance(values, (list, tuple)):
        return ()
    seen: dict[str, None] = {}
    for value in values:
        if isinstance(value, dict):
            value = value.get("name") or value.get("ref")
        if isinstance(value, str) and value.strip():
            seen.setdefault(value.strip(), None)
    return tuple(seen)


def infer_dataset_category(tags: Iterable[str], default: str = "other") -> str:
    """Map dataset tags onto a coarse domain ('vision', 'nlp', 'audio', 'tabular')."""
    lowered = {t.lower() for t in tags}
    for category, keywords in _DATASET_CATEGORIES:
        if lowered & keywords:
            return category
    return default


def infer_framework(tags: Iterable[str]) -> str:
    """Infer a model's framework from its hub tags."""
    lowered = {t.lower() for t in tags}
    if lowered & {"pytorch", "torch"}:
        return "PyTorch"
    if lowered & {"tensorflow", "tf"}:
        return "TensorFlow"
    if lowered & {"jax", "flax"}:
        return "JAX/Flax"
    if "onnx" in lowered:
        return "ONNX"
    return UNKNOWN


def format_size(size_in_bytes: Any) -> str:
    """Human readable size; missing or zero sizes are 'Unknown'."""
    size = _count(size_in_bytes)
    if not size:
        return UNKNOWN
    if size < 1024 * 1024:
        return f"{round(size / 1024)} KB"
    if size < 1024 * 1024 * 1024:
        return f"{round(size / (1024 * 1024))} MB"
    return f"{size / (1024 * 1024 * 1024):.1f} GB"


def is_open_source(license_data: Optional[dict], topics: Iterable[str]) -> bool:
    """True if the repository carries an OSI-style licence or an open-source topic."""
    if isinstance(license_data, dict):
        for key in ("spdx_id", "key", "name"):
            value = (license_data.get(key) or "").lower()
            if any(lic in value for lic in _OPEN_SOURCE_LICENSES):
                return True
    return any(t.lower() in _OPEN_SOURCE_TOPICS for t in topics)


def _tag_value(tags: Iterable[str], prefix: str) -> Optional[str]:
    """Return the value of a 'prefix:value' style hub tag."""
    for tag in tags:
        if tag.startswith(prefix + ":"):
            return tag.split(":", 1)[1] or None
    return None


# =========================
# Kaggle
# =========================

def normalize_kaggle_dataset(raw: dict[str, Any], source_name: str) -> CatalogEntry:
    """Kaggle /datasets/list record -> CatalogEntry."""
    raw = _require_mapping(raw)
    ref = _text(raw.get("ref") or raw.get("id"))
    if not ref:
        raise NormalizationError("Kaggle dataset without 'ref'")

    tags = _string_tags(raw.get("tags"))
    is_tabular = bool(raw.get("isTabular")) or "tabular" in {t.lower() for t in tags}
    owner_data = raw.get("owner")
    owner = raw.get("ownerName") or raw.get("creatorName") or (
        owner_data.get("name") if isinstance(owner_data, dict) else owner_data
    )
    license_data = raw.get("license")
    license_name = raw.get("licenseName") or (
        license_data.get("name") if isinstance(license_data, dict) else license_data
    )
    size = raw.get("size") or format_size(raw.get("totalBytes"))
    url = _text(raw.get("url"))
    if url and not url.startswith("http"):
        url = f"https://www.kaggle.com{url if url.startswith('/') else '/' + url}"

    return CatalogEntry(
        id=generate_entry_id("kaggle", ref),
        name=_text(raw.get("title"), ref),
        source_name=source_name,
        description=_text(raw.get("subtitle") or raw.get("description")),
        tags=tags,
        category="tabular" if is_tabular else infer_dataset_category(tags),
        popularity=_count(raw.get("downloadCount")),
        last_updated=to_utc_datetime(raw.get("lastUpdated")),
        url=url or f"https://www.kaggle.com/datasets/{ref}",
        extras={
            "size": _text(size, UNKNOWN),
            "owner": _text(owner, UNKNOWN),
            "license": _text(license_name, UNKNOWN),
            "voteCount": _count(raw.get("voteCount")),
            "fileCount": _count(raw.get("fileCount")),
            "usability": raw.get("usabilityRating", raw.get("usability")) or 0,
            "isTabular": is_tabular,
            "imageUrl": raw.get("thumbnailUrl") or raw.get("imageUrl"),
        },
    )


# =========================
# Hugging Face
# =========================

def normalize_huggingface_dataset(raw: dict[str, Any], source_name: str) -> CatalogEntry:
    """Hugging Face /api/datasets record -> CatalogEntry."""
    raw = _require_mapping(raw)
    dataset_id = _text(raw.get("id"))
    if not dataset_id:
        raise NormalizationError("Hugging Face dataset without 'id'")

    tags = _string_tags(raw.get("tags"))
    card = raw.get("cardData") if isinstance(raw.get("cardData"), dict) else {}
    size = _tag_value(tags, "size_categories") or UNKNOWN

    return CatalogEntry(
        id=generate_entry_id("hf-dataset", dataset_id),
        name=_text(card.get("pretty_name"), dataset_id),
        source_name=source_name,
        description=_text(raw.get("description")),
        tags=tags,
        category=infer_dataset_category(tags),
        popularity=_count(raw.get("downloads")),
        last_updated=to_utc_datetime(raw.get("lastModified")),
        url=f"https://huggingface.co/datasets/{dataset_id}",
        extras={
            "size": size,
            "owner": _text(raw.get("author"), UNKNOWN),
            "license": _tag_value(tags, "license") or UNKNOWN,
            "likes": _count(raw.get("likes")),
        },
    )


def normalize_huggingface_model(raw: dict[str, Any], source_name: str) -> CatalogEntry:
    """Hugging Face /api/models record -> CatalogEntry."""
    raw = _require_mapping(raw)
    model_id = _text(raw.get("modelId") or raw.get("id"))
    if not model_id:
        raise NormalizationError("Hugging Face model without 'id'")

    tags = _string_tags(raw.get("tags"))
    card = raw.get("cardData") if isinstance(raw.get("cardData"), dict) else {}
    license_name = card.get("license") or _tag_value(tags, "license")
    if isinstance(license_name, list):
        license_name = ", ".join(str(x) for x in license_name)

    framework = UNKNOWN
    if isinstance(raw.get("library_name"), str):
        framework = infer_framework([raw["library_name"]])
    if framework == UNKNOWN:
        framework = infer_framework(tags)
    author = raw.get("author") or (model_id.split("/", 1)[0] if "/" in model_id else None)

    return CatalogEntry(
        id=generate_entry_id("hf-model", model_id),
        name=model_id,
        source_name=source_name,
        description=_text(raw.get("description") or card.get("model_description")),
        tags=tags,
        category=_text(raw.get("pipeline_tag"), UNKNOWN),
        popularity=_count(raw.get("downloads")),
        last_updated=to_utc_datetime(raw.get("lastModified")),
        url=f"https://huggingface.co/{model_id}",
        extras={
            "likes": _count(raw.get("likes")),
            "owner": _text(author, UNKNOWN),
            "framework": framework,
            "size": format_size(raw.get("size")),
            "license": _text(license_name, UNKNOWN),
            "paperUrl": card.get("paper"),
            "demoUrl": card.get("demo"),
            "isFineTuned": bool(card.get("fine_tuning") or card.get("base_model")),
        },
    )


# =========================
# GitHub
# =========================

def normalize_github_repo(raw: dict[str, Any], source_name: str) -> CatalogEntry:
    """GitHub repository object (search item or /repos/{owner}/{repo}) -> CatalogEntry."""
    raw = _require_mapping(raw)
    full_name = _text(raw.get("full_name"))
    if not full_name or "/" not in full_name:
        raise NormalizationError(f"GitHub repository without a valid 'full_name': {full_name!r}")

    topics = _string_tags(raw.get("topics"))
    language = _text(raw.get("language"), UNKNOWN)
    owner = raw.get("owner") if isinstance(raw.get("owner"), dict) else {}
    license_data = raw.get("license") if isinstance(raw.get("license"), dict) else None

    return CatalogEntry(
        id=generate_entry_id("github", full_name),
        name=_text(raw.get("name"), full_name.split("/", 1)[1]),
        source_name=source_name,
        description=_text(raw.get("description")),
        tags=topics,
        category=language,
        popularity=_count(raw.get("stargazers_count")),
        last_updated=to_utc_datetime(raw.get("updated_at")),
        url=_text(raw.get("html_url"), f"https://github.com/{full_name}"),
        extras={
            "fullName": full_name,
            "language": language,
            "forks": _count(raw.get("forks_count")),
            "owner": {
                "login": _text(owner.get("login"), full_name.split("/", 1)[0]),
                "avatarUrl": _text(owner.get("avatar_url")),
            },
            "license": (
                {"name": _text(license_data.get("name"), UNKNOWN), "url": _text(license_data.get("url"))}
                if license_data else None
            ),
            "isOpenSource": is_open_source(license_data, topics),
        },
    )


# =========================
# Static / public records
# =========================

def normalize_static_record(raw: dict[str, Any], source_name: str) -> CatalogEntry:
    """Bundled record already in CatalogEntry.to_dict() shape."""
    raw = _require_mapping(raw)
    if not raw.get("id"):
        raise NormalizationError("Static record without 'id'")
    try:
        entry = CatalogEntry.from_dict({**raw, "sourceName": source_name})
    except (TypeError, ValueError) as e:
        raise NormalizationError(f"Invalid static record {raw.get('id')!r}: {e}") from e
    if entry.category == UNKNOWN and entry.tags:
        return replace(entry, category=infer_dataset_category(entry.tags))
    return entry


def normalize_batch(
    records: Iterable[Any],
    normalizer: Normalizer,
    source_name: str,
) -> list[CatalogEntry]:
    """Apply a normalizer to a batch, dropping (and logging) records that fail."""
    entries: list[CatalogEntry] = []
    dropped = 0
    for raw in records:
        try:
            entries.append(normalizer(raw, source_name))
        except NormalizationError as e:
            dropped += 1
            logger.warning(f"[{source_name}] Dropped record: {e}")
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            # Unexpected upstream structure
            dropped += 1
            logger.warning(f"[{source_name}] Dropped malformed record: {e!r}")
    if dropped:
        logger.info(f"[{source_name}] Normalized {len(entries)} records, dropped {dropped}")
    return entries
