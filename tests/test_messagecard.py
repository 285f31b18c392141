import json

import pytest
from pydantic import ValidationError

from teamsnotify.errors import InvalidMessageCardError, SerializationError
from teamsnotify.messagecard import Action, ActionType, Card, Fact, Image, Section


def test_card_sets_schema_markers() -> None:
    card = Card()

    payload = card.to_payload()

    assert payload == {"@type": "MessageCard", "@context": "https://schema.org/extensions"}


def test_card_schema_markers_are_frozen() -> None:
    card = Card()

    with pytest.raises(ValidationError):
        card.type = "AdaptiveCard"


def test_add_fact_rejects_empty_name_or_value() -> None:
    section = Section()

    with pytest.raises(InvalidMessageCardError):
        section.add_fact(Fact(name="", value="v"))
    with pytest.raises(InvalidMessageCardError):
        section.add_fact(Fact(name="k", value=""))

    assert section.facts == []


def test_add_fact_appends_in_call_order() -> None:
    section = Section()

    section.add_fact(Fact(name="k1", value="v1"), Fact(name="k2", value="v2"))
    section.add_fact(Fact(name="k3", value="v3"))

    assert [f.name for f in section.facts] == ["k1", "k2", "k3"]


def test_add_fact_is_all_or_nothing() -> None:
    section = Section()

    with pytest.raises(InvalidMessageCardError, match="index 1"):
        section.add_fact(Fact(name="ok", value="v"), Fact(name="", value="v"))

    assert section.facts == []


def test_add_fact_from_key_value_joins_values() -> None:
    section = Section()

    section.add_fact_from_key_value("hosts", "web01", "web02")

    assert section.facts[0].value == "web01, web02"
    with pytest.raises(InvalidMessageCardError):
        section.add_fact_from_key_value("", "x")
    with pytest.raises(InvalidMessageCardError):
        section.add_fact_from_key_value("key")


def test_add_section_rejects_default_section() -> None:
    card = Card(text="hi")

    with pytest.raises(InvalidMessageCardError, match="index 0"):
        card.add_section(Section())

    assert card.sections == []


def test_add_section_accepts_start_group_only() -> None:
    card = Card(text="hi")

    card.add_section(Section(start_group=True))

    assert len(card.sections) == 1
    assert card.to_payload()["sections"] == [{"startGroup": True}]


def test_add_section_aborts_whole_call_on_first_invalid() -> None:
    card = Card(text="hi")

    with pytest.raises(InvalidMessageCardError, match="index 1"):
        card.add_section(Section(title="first"), None, Section(title="third"))

    assert card.sections == []


def test_add_section_copies_value() -> None:
    card = Card(text="hi")
    section = Section(title="original")

    card.add_section(section)
    section.title = "changed"

    assert card.sections[0].title == "original"


def test_section_is_default() -> None:
    assert Section().is_default()
    assert not Section(markdown=True).is_default()
    assert not Section(text="body").is_default()

    section = Section()
    section.add_fact(Fact(name="k", value="v"))
    assert not section.is_default()


def test_add_image_and_hero_image() -> None:
    section = Section()

    with pytest.raises(InvalidMessageCardError):
        section.add_image(Image(url="", title="t"))
    with pytest.raises(InvalidMessageCardError):
        section.add_hero_image(Image(url="https://example.com/a.png", title=""))

    section.add_image(Image(url="https://example.com/a.png", title="a"))
    section.add_hero_image(Image(url="https://example.com/b.png", title="b"))
    section.add_hero_image(Image(url="https://example.com/c.png", title="c"))

    assert len(section.images) == 1
    assert section.hero_image is not None
    assert section.hero_image.title == "c"
    payload = section.model_dump(mode="json", by_alias=True)
    assert payload["heroImage"] == {"image": "https://example.com/c.png", "title": "c"}


def test_add_action_rejects_non_action() -> None:
    card = Card(text="hi")

    with pytest.raises(InvalidMessageCardError):
        card.add_action({"@type": "OpenUri"})  # type: ignore[arg-type]


def test_action_wire_format() -> None:
    card = Card(text="hi")
    card.add_action(Action.open_uri("Project Homepage", "https://github.com/example/project"))

    action = card.to_payload()["potentialAction"][0]

    assert action == {
        "@type": "OpenUri",
        "@context": "https://schema.org/extensions",
        "name": "Project Homepage",
        "isPrimaryAction": False,
        "targets": [{"os": "default", "uri": "https://github.com/example/project"}],
    }


def test_markdown_only_emitted_when_true() -> None:
    card = Card(text="hi")
    card.add_section(Section(title="plain"), Section(title="md", markdown=True))

    sections = card.to_payload()["sections"]

    assert "markdown" not in sections[0]
    assert sections[1]["markdown"] is True


def test_round_trip_preserves_sections_and_action_targets() -> None:
    card = Card(title="Deploy", text="done", theme_color="#DF813D")
    first = Section(title="first")
    first.add_fact(Fact(name="env", value="prod"))
    second = Section(title="second", start_group=True)
    second.add_action(Action.view("Logs", "https://example.com/logs"))
    card.add_section(first, second)
    card.add_action(Action.open_uri("Release", "https://example.com/release", os="windows"))

    restored = Card.model_validate(json.loads(card.to_json()))

    assert [s.title for s in restored.sections] == ["first", "second"]
    assert restored.sections[0].facts[0].value == "prod"
    assert restored.sections[1].potential_action[0].target == ["https://example.com/logs"]
    assert restored.potential_action[0].type is ActionType.OPEN_URI
    assert [(t.os, t.uri) for t in restored.potential_action[0].targets] == [
        ("windows", "https://example.com/release")
    ]
    assert restored == card


def test_to_json_keeps_non_ascii_text() -> None:
    card = Card(text="배포 완료")

    body = card.to_json()

    assert "배포 완료".encode("utf-8") in body


def test_assignment_is_type_checked() -> None:
    card = Card(text="hi")
    section = Section(title="ok")

    with pytest.raises(ValidationError):
        card.text = 5  # type: ignore[assignment]
    with pytest.raises(ValidationError):
        section.start_group = object()  # type: ignore[assignment]

    assert card.text == "hi"


@pytest.mark.filterwarnings("ignore::UserWarning")
def test_unserializable_value_raises_serialization_error() -> None:
    card = Card(text="hi")
    # list 에 직접 넣으면 할당 검증을 거치지 않는다
    card.sections.append(Section.model_construct(title=object()))

    with pytest.raises(SerializationError):
        card.to_json()
