"""
Record factories and hypothesis strategies shared by the test modules.
"""

from hypothesis import strategies as st

from models import Friction, ReportData, Rule, Stat


def make_friction(title="Test Friction", description="A test friction category for unit testing.", examples=None):
    if examples is None:
        examples = [
            "When configuring test fixtures, the setup was incomplete",
            "When running parallel tests, state leaked between suites",
        ]
    return Friction(title=title, description=description, examples=list(examples))


def make_rule(code="Always run tests before committing changes",
              why="Prevents broken builds from reaching the main branch"):
    return Rule(code=code, why=why)


def make_report(frictions=None, rules=None, stats=None, title="Test Report"):
    return ReportData(
        title=title,
        frictions=list(frictions or []),
        rules=list(rules or []),
        stats=list(stats or []),
    )


def make_stats(messages, sessions):
    return [Stat(value=messages, label="Messages"), Stat(value=sessions, label="Sessions")]


# =============================================================================
# STRATEGIES
# =============================================================================

# Mix of significant words, stop words, short tokens and punctuation so that
# generated phrases overlap often enough to exercise both outcomes.
VOCABULARY = [
    "css", "scoping", "component", "styles", "debugging", "root", "causes",
    "query", "database", "imports", "tests", "wrong", "missing", "build",
    "the", "and", "with", "not", "is", "a", "of", "to", "ok", "x",
    "CSS,", "Root!", "(tests)", "--",
]

phrases = st.lists(st.sampled_from(VOCABULARY), max_size=8).map(" ".join)

# Phrases that always carry at least one significant word.
significant_phrases = st.lists(
    st.sampled_from(VOCABULARY[:14]), min_size=1, max_size=6
).map(" ".join)

frictions = st.builds(
    make_friction,
    title=phrases,
    description=st.just(""),
    examples=st.lists(st.sampled_from(["ex one", "ex two", "ex three"]), max_size=3),
)

friction_sources = st.lists(st.lists(frictions, max_size=4), max_size=5)
