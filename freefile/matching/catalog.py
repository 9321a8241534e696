"""Offer catalog loader with YAML parsing and validation.

The packaged catalog lives in ``data/partners.yaml``. Deployments can point
``PARTNERS_FILE`` at their own file with the same shape::

    offers:
      - id: example
        name: Example
        url: https://example.com
        max_agi: 79000
        ...
"""

from collections.abc import Iterable, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML

from freefile.core.config import settings
from freefile.core.logging import get_logger
from freefile.matching.models import Offer

logger = get_logger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "partners.yaml"


class CatalogLoadError(Exception):
    """Exception raised when an offer catalog cannot be loaded or validated."""

    def __init__(self, message: str, path: Path | None = None, errors: list[str] | None = None):
        """Initialize CatalogLoadError.

        Args:
            message: Human-readable error message
            path: Path to the catalog file that failed to load
            errors: List of specific validation errors
        """
        self.path = path
        self.errors = errors or []
        super().__init__(message)


def _parse_yaml(path: Path) -> dict[str, Any]:
    """Parse a catalog YAML file into a dictionary.

    Raises:
        CatalogLoadError: If the file cannot be read or parsed
    """
    yaml = YAML(typ="safe")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except FileNotFoundError:
        raise CatalogLoadError(f"Catalog file not found: {path}", path=path)
    except Exception as e:
        raise CatalogLoadError(f"Failed to parse YAML: {e}", path=path)

    if data is None:
        raise CatalogLoadError("Empty catalog file", path=path)

    if not isinstance(data, dict):
        raise CatalogLoadError(
            f"Catalog file must be a YAML mapping, got {type(data).__name__}",
            path=path,
        )

    return dict(data)


def load_offers_from_list(
    data: Iterable[dict[str, Any]], path: Path | None = None
) -> tuple[Offer, ...]:
    """Validate raw offer records into `Offer` models.

    Args:
        data: Offer records, one mapping per offer
        path: Optional path for error reporting

    Returns:
        Offers in declaration order

    Raises:
        CatalogLoadError: If any record fails validation or ids repeat
    """
    offers: list[Offer] = []
    seen: set[str] = set()

    for index, record in enumerate(data):
        try:
            offer = Offer.model_validate(record)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise CatalogLoadError(
                f"Invalid offer at index {index}: {errors[0]}",
                path=path,
                errors=errors,
            )

        if offer.id in seen:
            raise CatalogLoadError(
                f"Duplicate offer id: {offer.id}",
                path=path,
                errors=[f"Duplicate offer id: {offer.id}"],
            )
        seen.add(offer.id)
        offers.append(offer)

    return tuple(offers)


def load_offers_from_yaml(path: str | Path) -> tuple[Offer, ...]:
    """Load an offer catalog from a YAML file path.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed and validated offers

    Raises:
        CatalogLoadError: If the file cannot be loaded or validation fails
    """
    path = Path(path)
    data = _parse_yaml(path)

    records = data.get("offers")
    if records is None:
        raise CatalogLoadError(
            "Missing required 'offers' section",
            path=path,
            errors=["Missing required 'offers' section"],
        )
    if not isinstance(records, list):
        raise CatalogLoadError(
            f"'offers' must be a list, got {type(records).__name__}",
            path=path,
        )

    offers = load_offers_from_list(records, path=path)
    logger.info("catalog_loaded", path=str(path), offer_count=len(offers))
    return offers


@lru_cache(maxsize=1)
def load_default_catalog() -> tuple[Offer, ...]:
    """Load the configured catalog once per process.

    Uses ``settings.partners_file`` when set, otherwise the packaged file.
    """
    return load_offers_from_yaml(settings.partners_file or DEFAULT_CATALOG_PATH)


def get_offer_by_id(offers: Sequence[Offer], offer_id: str) -> Offer | None:
    """Find an offer by id, or None when it is not in the catalog."""
    for offer in offers:
        if offer.id == offer_id:
            return offer
    return None
