"""PokeAPI lookups (unauthenticated, read-only)."""
import logging
from typing import Optional, Union
from urllib.parse import quote

import requests

from activities.config import settings
from activities.modules.pokemon_reviews.schemas import PokemonResponse

logger = logging.getLogger(__name__)


def sprite_url_for_id(pokemon_id: int) -> str:
    return settings.pokemon_sprite_url_template.format(id=pokemon_id)


def normalize_identifier(identifier: Union[str, int]) -> str:
    if isinstance(identifier, int):
        return str(identifier)
    return identifier.strip().lower()


def fetch_pokemon(identifier: Union[str, int]) -> Optional[PokemonResponse]:
    """
    Look up a Pokemon by name or numeric id.

    Returns None when the identifier is blank, PokeAPI answers non-2xx,
    or the request fails.
    """
    value = normalize_identifier(identifier)
    if not value:
        return None
    url = f"{settings.pokeapi_base_url.rstrip('/')}/pokemon/{quote(value, safe='')}"
    try:
        response = requests.get(url, timeout=settings.pokeapi_timeout_seconds)
    except requests.RequestException as e:
        logger.error(f"Failed to load pokemon {value}: {e}")
        return None
    if not response.ok:
        logger.info(f"Pokemon {value} not found (HTTP {response.status_code})")
        return None
    try:
        data = response.json()
        pokemon_id = int(data["id"])
        name = data["name"]
    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Unexpected PokeAPI payload for {value}: {e}")
        return None
    sprite = (data.get("sprites") or {}).get("front_default")
    return PokemonResponse(
        id=pokemon_id,
        name=name,
        sprite_url=sprite or sprite_url_for_id(pokemon_id)
    )
