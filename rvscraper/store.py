"""
Persisted per-site configuration and the global synonym dictionary.

domain-mappings.json is keyed by second-level domain ("granddesignrv") and
holds the site's Make, its CSS selectors and every raw key -> canonical key
answer learned so far. It is rewritten after every record so a crash loses at
most one record's worth of answers.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field

from .config import SELECTOR_FIELDS, STRATEGY_FIELDS
from .errors import MappingPersistError
from .logging import log_header, log_stage
from .utils.file_utils import backup_file


class DomainMapping(BaseModel):
    """Selectors and learned key mappings for one second-level domain."""
    make: str | None = Field(default=None, alias="Make")
    make_selector: str | None = Field(default=None, alias="makeSelector")
    year_selector: str | None = Field(default=None, alias="yearSelector")
    type_selector: str | None = Field(default=None, alias="typeSelector")
    model_selector: str | None = Field(default=None, alias="modelSelector")
    model_strategy: str | None = Field(default=None, alias="modelStrategy")
    trim_selector: str | None = Field(default=None, alias="trimSelector")
    image_selector: str | None = Field(default=None, alias="imageSelector")
    description_selector: str | None = Field(default=None, alias="descriptionSelector")
    row_selector: str | None = Field(default=None, alias="rowSelector")
    dl_selector: str | None = Field(default=None, alias="dlSelector")
    options_selector: str | None = Field(default=None, alias="optionsSelector")
    web_features_selector: str | None = Field(default=None, alias="webFeaturesSelector")
    web_features_strategy: str | None = Field(default=None, alias="webFeaturesStrategy")

    # raw key -> canonical key, or None for "known, discard"
    key_mappings: dict[str, str | None] = Field(default_factory=dict, alias="keyMappings")

    class Config:
        populate_by_name = True
        # Hand-added keys (notes etc.) survive a load and persist
        extra = "allow"

    def knows(self, raw_key: str) -> bool:
        return raw_key in self.key_mappings

    def remember(self, raw_key: str, canonical_key: str | None):
        """Record a resolution. Existing answers are never overwritten."""
        self.key_mappings.setdefault(raw_key, canonical_key)


class SynonymDictionary:
    """
    Advisory raw key -> candidate canonical key table (hand-edited, read-only).

    A None value marks a label known to carry nothing useful.
    """

    def __init__(self, entries: dict | None = None, path=None):
        self.entries = dict(entries or {})
        self.path = Path(path) if path else None

    @classmethod
    def load(cls, path):
        with open(path, "r", encoding="utf-8") as f:
            return cls(json.load(f), path)

    def __contains__(self, raw_key):
        return raw_key in self.entries

    def __len__(self):
        return len(self.entries)

    def candidate(self, raw_key):
        return self.entries.get(raw_key)

    def keys(self):
        return self.entries.keys()


class DomainMappingStore:
    """
    The DomainMapping collection plus the file it lives in.

    Args:
        path: JSON file to load from and persist to
        mappings: initial mappings (otherwise loaded from path if it exists)
    """

    def __init__(self, path, mappings: dict[str, DomainMapping] | None = None):
        self.path = Path(path) if path else None
        self.mappings = mappings if mappings is not None else {}

    @classmethod
    def load(cls, path):
        """Load the store; a missing file starts an empty store."""
        path = Path(path)
        mappings = {}
        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            mappings = {domain: DomainMapping.model_validate(data) for domain, data in raw.items()}
        return cls(path, mappings)

    def __contains__(self, domain):
        return domain in self.mappings

    def get(self, domain) -> DomainMapping | None:
        return self.mappings.get(domain)

    def get_or_create_mapping(self, domain, prompter) -> DomainMapping:
        """
        Return the mapping for a domain, prompting for a new one if it's unknown.

        A new mapping is persisted immediately so the operator is never asked
        for the same site's selectors twice.
        """
        if domain in self.mappings:
            return self.mappings[domain]

        log_header(f'Enter variable values for new domain: "{domain}"')
        values = {"Make": prompter.ask_value("Make")}
        for selector_name in SELECTOR_FIELDS:
            values[selector_name] = prompter.ask_selector(selector_name)

        for strategy_name in STRATEGY_FIELDS:
            values[strategy_name] = prompter.ask_strategy(strategy_name)

        mapping = DomainMapping.model_validate(values)
        self.mappings[domain] = mapping
        self.persist()
        return mapping

    def to_dict(self):
        return {
            domain: mapping.model_dump(by_alias=True)
            for domain, mapping in self.mappings.items()
        }

    def persist(self):
        """
        Write the whole collection, pretty-printed with sorted keys.

        Written to a temp file and swapped in so a crash mid-write can't
        truncate the learned mappings.

        Raises:
            MappingPersistError: on any I/O failure
        """
        if self.path is None:
            return

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2, sort_keys=True, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise MappingPersistError(
                f"Failed to write domain mappings to {self.path}: {e}"
            ) from e

    def backup(self, backup_dir, extra_files=()):
        """Copy the mapping file (and e.g. the synonym file) aside before a run."""
        for path in [self.path, *extra_files]:
            if path and Path(path).exists():
                backup_file(path, backup_dir)
                log_stage("output", f"Backed up {path} to {backup_dir}")
