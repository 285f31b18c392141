"""MessageCard 텍스트 필드용 Markdown 코드 포맷 헬퍼."""

import json

# Teams 는 앞뒤 개행을 표시하지 않지만 코드 블록 인식에는 필요하다.
CODE_BLOCK_PREFIX = "\n```\n"
CODE_BLOCK_SUFFIX = "\n```\n"
CODE_SNIPPET_PREFIX = "`"
CODE_SNIPPET_SUFFIX = "`"


def format_as_code_block(text: str) -> str:
    """여러 줄 Markdown 코드 블록으로 감싼다. JSON 입력은 탭 들여쓰기로 정리된다."""
    return _format_as_code(text, CODE_BLOCK_PREFIX, CODE_BLOCK_SUFFIX)


def format_as_code_snippet(text: str) -> str:
    """한 줄 Markdown 인라인 코드로 감싼다."""
    return _format_as_code(text, CODE_SNIPPET_PREFIX, CODE_SNIPPET_SUFFIX)


def _format_as_code(text: str, prefix: str, suffix: str) -> str:
    if not text:
        raise ValueError("received empty string, refusing to format as code")

    try:
        formatted = json.dumps(json.loads(text), indent="\t", ensure_ascii=False)
    except ValueError:
        # JSON 이 아니면 문자열 리터럴로 인코딩 (개행 등은 escape 됨)
        formatted = json.dumps(text, ensure_ascii=False)

    # 문자열 리터럴이면 양끝 따옴표 제거
    if len(formatted) >= 2 and formatted.startswith('"') and formatted.endswith('"'):
        formatted = formatted[1:-1]

    return prefix + formatted + suffix
