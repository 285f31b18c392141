from typing import Protocol, runtime_checkable

from teamsnotify.messagecard import Card


@runtime_checkable
class TeamsSender(Protocol):
    """동기 MessageCard 전송 프로토콜."""

    def send(self, webhook_url: str, card: Card) -> None:
        ...


@runtime_checkable
class AsyncTeamsSender(Protocol):
    """비동기 MessageCard 전송 프로토콜."""

    async def send(self, webhook_url: str, card: Card) -> None:
        ...
