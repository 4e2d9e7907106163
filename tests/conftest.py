"""
Shared fixtures: in-memory mapping store, scripted prompter, sample synonyms.

Nothing here touches a browser or the network.
"""

import pytest

from rvscraper.prompts import Prompter
from rvscraper.store import DomainMapping, DomainMappingStore, SynonymDictionary


class InMemoryStore(DomainMappingStore):
    """DomainMappingStore that counts persists instead of writing a file."""

    def __init__(self, mappings=None):
        super().__init__(None, mappings)
        self.persist_count = 0

    def persist(self):
        self.persist_count += 1


class ScriptedInput:
    """input() replacement that replays answers and records the questions asked."""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.questions = []

    def __call__(self, question):
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question!r}")
        return self.answers.pop(0)

    def add(self, *answers):
        self.answers.extend(answers)


SAMPLE_SYNONYMS = {
    "Shower": "Shower",
    "Tire code": "Tire code",
    "UVW": "Dry weight lbs",
    "GVWR": "Gvwr lbskgs",
    "Length": "Length ftin",
    "Awning Length": "Awning length ftm",
    "Brochure": None,
    "Mystery": "Not a real field",
}


@pytest.fixture
def scripted_input():
    return ScriptedInput()


@pytest.fixture
def prompter(scripted_input):
    return Prompter(input_func=scripted_input)


@pytest.fixture
def synonyms():
    return SynonymDictionary(SAMPLE_SYNONYMS)


@pytest.fixture
def mapping():
    return DomainMapping(Make="Grand Design")


@pytest.fixture
def store(mapping):
    return InMemoryStore({"granddesignrv": mapping})
