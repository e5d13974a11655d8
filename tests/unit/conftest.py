"""Unit test fixtures - small hand-built knowledge entries"""

import pytest

from modassist.models import KnowledgeEntry


@pytest.fixture
def ballistic_entry():
    return KnowledgeEntry(
        id="ballistic-weave",
        title="Ballistic Weave",
        content="Ballistic Weave lets you upgrade clothing with damage resistance.",
        keywords=["ballistic", "weave"],
    )


@pytest.fixture
def enb_entry():
    return KnowledgeEntry(
        id="enb-basics",
        title="ENB Basics",
        content="ENB is a post-processing injector for better lighting.",
        keywords=["enb"],
    )


@pytest.fixture
def f4se_entry():
    """Entry reachable only through its keyword"""
    return KnowledgeEntry(
        id="script-extender",
        title="Script Extender",
        content="Extends the scripting engine with new functions.",
        keywords=["f4se"],
    )


@pytest.fixture
def sample_entries(ballistic_entry, enb_entry, f4se_entry):
    return [ballistic_entry, enb_entry, f4se_entry]
