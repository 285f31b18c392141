"""샘플 MessageCard 전송 스크립트.

TEAMS_WEBHOOK_URL (및 선택적으로 TEAMS_* 설정)을 .env 또는 환경변수로 지정한 뒤 실행한다.
"""

import sys

from teamsnotify import Action, Card, Fact, Section, TeamsClient, TeamsNotifyError, format_as_code_snippet
from teamsnotify.logging import get_logger
from teamsnotify.settings import get_settings


def build_card() -> Card:
    """샘플 카드 생성."""
    card = Card(
        title="Hello world",
        text="Here are some examples of formatted stuff like "
        "<br> * this list itself  <br> * **bold** <br> * *italic* <br> * ***bolditalic***",
        theme_color="#DF813D",
    )

    section = Section(activity_title="teamsnotify", markdown=True)
    section.add_fact(Fact(name="command", value=format_as_code_snippet("python scripts/send_message.py")))
    section.add_fact_from_key_value("targets", "outlook.office.com", "webhook.office.com")
    card.add_section(section)

    card.add_action(Action.open_uri("Project Homepage", "https://github.com/"))
    return card


def main() -> int:
    """메시지 전송."""
    logger = get_logger("teamsnotify.scripts")
    settings = get_settings()

    if not settings.teams.webhook_url:
        logger.error("TEAMS_WEBHOOK_URL is not set")
        return 1

    with TeamsClient.from_settings(settings.teams) as client:
        try:
            client.send(settings.teams.webhook_url, build_card())
        except TeamsNotifyError as e:
            logger.error("failed to send message", error=str(e))
            return 1

    logger.info("message sent")
    return 0


if __name__ == "__main__":
    sys.exit(main())
