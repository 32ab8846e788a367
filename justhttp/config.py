"""
This module provides configuration management for named request profiles.

Classes:
    Profile: A named set of request arguments (timeout, size limit, basic auth, query params).

Functions:
    load_profiles(directory: Path) -> Dict[str, Profile]:
        Loads profile definitions from YAML files in the specified directory.

    find_profile(profiles: Dict[str, Profile], name: str) -> Optional[Profile]:
        Returns the Profile registered under the given name, if any.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any
import yaml
import sys

from .options import RequestArguments


@dataclass
class Profile:
    name: str
    arguments: RequestArguments = field(default_factory=RequestArguments)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Profile":
        return Profile(
            name=data["name"],
            arguments=RequestArguments.from_dict(data),
        )


def load_profiles(directory: Path) -> Dict[str, Profile]:
    profiles: Dict[str, Profile] = {}
    for path in sorted(directory.glob("*.y*ml")):
        try:
            with path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            print(f"[LOAD PROFILES] Failed to parse {path}: {e}", file=sys.stderr)
            continue
        try:
            profile = Profile.from_dict(raw)
        except KeyError as ke:
            print(f"[LOAD PROFILES] Missing key {ke} in {path}", file=sys.stderr)
            continue
        except (AttributeError, TypeError) as e:
            print(f"[LOAD PROFILES] Invalid profile in {path}: {e}", file=sys.stderr)
            continue
        profiles[profile.name] = profile
    return profiles


def find_profile(profiles: Dict[str, Profile], name: str) -> Optional[Profile]:
    return profiles.get(name)
