"""
Chitoor mandal and village lookup used by the Chitoor project form.

The village list ships as ``solarops/data/chitoor_locations.csv``; a few
mandals are offered on their own even though no villages are listed for them.
"""
import csv
import io
from collections import OrderedDict
from functools import lru_cache
from importlib import resources
from typing import Dict, List, Optional

EXTRA_MANDALS = ["Sadum", "Pulicherla", "Rompicherla", "Vijayapuram", "G.D. Nellore", "Palasamudram"]


@lru_cache(maxsize=1)
def chitoor_locations() -> Dict[str, List[str]]:
    """Mandal -> villages, mandals in file order, duplicate villages dropped."""
    text = resources.files("solarops").joinpath("data/chitoor_locations.csv").read_text(encoding="utf-8")
    mandals: Dict[str, List[str]] = OrderedDict()
    for row in csv.DictReader(io.StringIO(text)):
        village = (row.get("village") or "").strip()
        mandal = (row.get("mandal") or "").strip()
        if not mandal:
            continue
        villages = mandals.setdefault(mandal, [])
        if village and village not in villages:
            villages.append(village)
    for mandal in EXTRA_MANDALS:
        villages = mandals.setdefault(mandal, [])
        if mandal not in villages:
            villages.append(mandal)
    return mandals


def find_mandals(search: Optional[str] = None) -> Dict[str, List[str]]:
    """Mandals whose own name or one of whose villages contains ``search``."""
    locations = chitoor_locations()
    if not search or not search.strip():
        return dict(locations)
    needle = search.strip().lower()
    return {
        mandal: villages for mandal, villages in locations.items()
        if needle in mandal.lower() or any(needle in v.lower() for v in villages)
    }
