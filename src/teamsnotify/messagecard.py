"""MessageCard 문서 모델.

Teams Incoming Webhook이 받는 MessageCard 포맷을 pydantic 모델로 표현한다.
직렬화 시 빈 값/기본값 필드는 생략되고 ``@type``/``@context`` 같은 고정 마커만
항상 출력된다.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, ClassVar, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic_core import PydanticSerializationError

from teamsnotify.errors import InvalidMessageCardError, SerializationError

MESSAGE_CARD_TYPE = "MessageCard"
SCHEMA_CONTEXT = "https://schema.org/extensions"


def _is_empty(value: Any) -> bool:
    return value is None or value is False or value == "" or value == []


class _CardElement(BaseModel):
    """MessageCard 구성 요소 공통 베이스."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    # 비어 있어도 항상 출력되는 키 (필드명/alias 모두 기재)
    always_emit: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def omit_empty_values(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if k in self.always_emit or not _is_empty(v)}


class ActionType(str, Enum):
    """potentialAction 종류."""

    OPEN_URI = "OpenUri"
    VIEW_ACTION = "ViewAction"
    HTTP_POST = "HttpPOST"
    ACTION_CARD = "ActionCard"
    INVOKE_ADDIN_COMMAND = "InvokeAddInCommand"


class Fact(_CardElement):
    """섹션 안의 key/value 표시 쌍."""

    name: str
    value: str


class Image(_CardElement):
    """갤러리 이미지 또는 hero 이미지."""

    url: str = Field(alias="image")
    title: str


class OpenURITarget(_CardElement):
    """OpenUri 액션의 플랫폼별 대상 URI."""

    os: str = "default"
    uri: str


class Action(_CardElement):
    """사용자가 실행할 수 있는 액션 (링크 열기 등)."""

    always_emit: ClassVar[frozenset[str]] = frozenset(
        {"type", "@type", "context", "@context", "name", "is_primary_action", "isPrimaryAction"}
    )

    type: ActionType = Field(alias="@type")
    name: str = ""
    context: str = Field(default=SCHEMA_CONTEXT, alias="@context")
    id: Optional[str] = Field(default=None, alias="@id")
    is_primary_action: bool = Field(default=False, alias="isPrimaryAction")
    target: list[str] = Field(default_factory=list)
    targets: list[OpenURITarget] = Field(default_factory=list)

    @classmethod
    def open_uri(cls, name: str, uri: str, os: str = "default") -> Action:
        """단일 대상 OpenUri 액션 생성."""
        return cls(type=ActionType.OPEN_URI, name=name, targets=[OpenURITarget(os=os, uri=uri)])

    @classmethod
    def view(cls, name: str, *urls: str) -> Action:
        """ViewAction 생성 (target 은 URL 문자열 목록)."""
        return cls(type=ActionType.VIEW_ACTION, name=name, target=list(urls))


def _copy_actions(actions: tuple[Any, ...]) -> list[Action]:
    copied: list[Action] = []
    for idx, action in enumerate(actions):
        if not isinstance(action, Action):
            raise InvalidMessageCardError(
                f"invalid action at index {idx}: expected Action, got {type(action).__name__}"
            )
        copied.append(action.model_copy(deep=True))
    return copied


def _check_image(image: Optional[Image], label: str) -> None:
    if image is None:
        raise InvalidMessageCardError(f"{label}: image is missing")
    if not image.url:
        raise InvalidMessageCardError(f"{label}: empty URL received for image")
    if not image.title:
        raise InvalidMessageCardError(f"{label}: empty title received for image")


class Section(_CardElement):
    """Card 내부의 하위 블록."""

    title: str = ""
    text: str = ""
    activity_title: str = Field(default="", alias="activityTitle")
    activity_subtitle: str = Field(default="", alias="activitySubtitle")
    activity_text: str = Field(default="", alias="activityText")
    activity_image: str = Field(default="", alias="activityImage")
    markdown: bool = False
    facts: list[Fact] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)
    hero_image: Optional[Image] = Field(default=None, alias="heroImage")
    potential_action: list[Action] = Field(default_factory=list, alias="potentialAction")
    start_group: bool = Field(default=False, alias="startGroup")

    def is_default(self) -> bool:
        """모든 필드가 기본값인지 여부."""
        return self == type(self)()

    def add_fact(self, *facts: Fact) -> None:
        """Fact 추가. 하나라도 name/value 가 비어 있으면 아무것도 추가하지 않는다."""
        for idx, fact in enumerate(facts):
            if fact is None:
                raise InvalidMessageCardError(f"invalid fact at index {idx}: fact is missing")
            if not fact.name:
                raise InvalidMessageCardError(f"invalid fact at index {idx}: empty name received")
            if not fact.value:
                raise InvalidMessageCardError(f"invalid fact at index {idx}: empty value received")
        self.facts.extend(fact.model_copy() for fact in facts)

    def add_fact_from_key_value(self, key: str, *values: str) -> None:
        """key 와 여러 값을 받아 ``", "`` 로 이어붙인 Fact 하나를 추가."""
        if not key:
            raise InvalidMessageCardError("empty key received for new fact")
        if not values:
            raise InvalidMessageCardError("no values received for new fact")
        self.add_fact(Fact(name=key, value=", ".join(values)))

    def add_image(self, *images: Image) -> None:
        for idx, image in enumerate(images):
            _check_image(image, f"invalid image at index {idx}")
        self.images.extend(image.model_copy() for image in images)

    def add_hero_image(self, image: Image) -> None:
        """hero 이미지는 섹션당 하나이므로 기존 값을 교체한다."""
        _check_image(image, "invalid hero image")
        self.hero_image = image.model_copy()

    def add_action(self, *actions: Action) -> None:
        self.potential_action.extend(_copy_actions(actions))


class Card(_CardElement):
    """Teams 로 전송되는 루트 MessageCard 문서.

    사용 예::

        card = Card(title="배포 완료", text="v1.2.3 배포가 끝났습니다.")
        section = Section(activity_title="build #42")
        section.add_fact(Fact(name="환경", value="prod"))
        card.add_section(section)
        card.add_action(Action.open_uri("릴리스 노트", "https://example.com/notes"))
    """

    always_emit: ClassVar[frozenset[str]] = frozenset({"type", "@type", "context", "@context"})

    type: Literal["MessageCard"] = Field(default=MESSAGE_CARD_TYPE, alias="@type", frozen=True)
    context: Literal["https://schema.org/extensions"] = Field(
        default=SCHEMA_CONTEXT, alias="@context", frozen=True
    )
    summary: str = ""
    title: str = ""
    text: str = ""
    theme_color: str = Field(default="", alias="themeColor")
    sections: list[Section] = Field(default_factory=list)
    potential_action: list[Action] = Field(default_factory=list, alias="potentialAction")

    def add_section(self, *sections: Section) -> None:
        """섹션 추가.

        모든 후보를 먼저 검사하고, 첫 번째 잘못된 섹션에서 전체 호출을 중단한다
        (일부만 추가되는 일은 없다).
        """
        for idx, section in enumerate(sections):
            if section is None:
                raise InvalidMessageCardError(f"invalid section at index {idx}: section is missing")
            if section.is_default():
                raise InvalidMessageCardError(
                    f"invalid section at index {idx}: all fields are empty or default"
                )
        self.sections.extend(section.model_copy(deep=True) for section in sections)

    def add_action(self, *actions: Action) -> None:
        self.potential_action.extend(_copy_actions(actions))

    def to_payload(self) -> dict[str, Any]:
        """wire 포맷 dict 로 변환."""
        try:
            return self.model_dump(mode="json", by_alias=True)
        except PydanticSerializationError as e:
            raise SerializationError(f"unable to serialize message card: {e}") from e

    def to_json(self) -> bytes:
        """UTF-8 JSON 바디로 직렬화."""
        payload = self.to_payload()
        try:
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"unable to encode message card as JSON: {e}") from e
