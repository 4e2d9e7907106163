"""
Raw key -> canonical key resolution.

Three tiers, cheapest first:
1. the domain's learned keyMappings (never prompts)
2. the global synonym dictionary (self-evident matches accepted, others confirmed)
3. asking the operator

Every answer is written back into the domain's keyMappings, so each raw key is
asked about at most once per domain.
"""

from .config import STANDARDIZED_SCHEMA
from .logging import log_decision, log_stage, log_warning

# Resolution value meaning "drop this key"
DISCARD = None


class KeyResolver:
    """
    Resolves raw scraped keys for one run.

    Args:
        store: DomainMappingStore, persisted after each record's keys are resolved
        synonyms: SynonymDictionary
        prompter: Prompter used for confirmations and manual answers
        vocabulary: canonical field names accepted from the operator
    """

    def __init__(self, store, synonyms, prompter, vocabulary=None):
        self.store = store
        self.synonyms = synonyms
        self.prompter = prompter
        self.vocabulary = set(vocabulary or STANDARDIZED_SCHEMA)

    def resolve_key(self, mapping, raw_key, value):
        """
        Resolve one raw key against a domain mapping.

        Returns:
            str | None: canonical key, or DISCARD (None)
        """
        # 1. Learned for this domain
        if mapping.knows(raw_key):
            return mapping.key_mappings[raw_key]

        # 2. Global synonym dictionary
        if raw_key in self.synonyms:
            candidate = self.synonyms.candidate(raw_key)

            if candidate is None:
                log_decision(f'Discarding "{raw_key}"', "synonym dictionary marks it as not a field")
                return DISCARD

            if candidate not in self.vocabulary:
                log_warning(f'Synonym for "{raw_key}" points at unknown field "{candidate}", ignoring it')
            elif raw_key.lower() == candidate.lower():
                mapping.remember(raw_key, candidate)
                log_decision(f'"{raw_key}" -> "{candidate}"', "self-evident match")
                return candidate
            elif self.prompter.ask_yes_no(
                f'\nKey "{raw_key}" (value: "{value}") looks like "{candidate}". Use it?'
            ):
                mapping.remember(raw_key, candidate)
                log_decision(f'"{raw_key}" -> "{candidate}"', "confirmed synonym")
                return candidate

        # 3. Ask the operator
        canonical_key = self.prompter.ask_canonical_key(raw_key, value, self.vocabulary)
        mapping.remember(raw_key, canonical_key)
        if canonical_key is DISCARD:
            log_decision(f'Discarding "{raw_key}"', "operator answered null")
        else:
            log_decision(f'"{raw_key}" -> "{canonical_key}"', "operator answer")
        return canonical_key

    def resolve_record(self, mapping, raw_record):
        """
        Rename every key of a raw record, dropping discarded keys.

        If two raw keys land on the same canonical key the first one wins.
        The store is persisted afterwards so answers survive a crash.

        Returns:
            dict: canonical key -> raw value
        """
        renamed = {}

        for raw_key, value in raw_record.items():
            canonical_key = self.resolve_key(mapping, raw_key, value)
            if canonical_key is DISCARD:
                continue
            if canonical_key in renamed:
                log_warning(
                    f'"{raw_key}" also maps to "{canonical_key}"; keeping the first value',
                    {"kept": renamed[canonical_key], "dropped": value},
                )
                continue
            renamed[canonical_key] = value

        self.store.persist()
        log_stage("resolve", f"Resolved {len(renamed)} of {len(raw_record)} keys")
        return renamed
