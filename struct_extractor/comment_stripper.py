"""
C 주석 제거

구조 매칭 전에 // 라인 주석과 /* */ 블록 주석을 제거합니다.
"""

import re

from .patterns import PATTERN_COMMENT


class CommentStripper:
    """
    주석 제거기

    - 라인 주석: // ... (줄 끝까지)
    - 블록 주석: /* ... */ (중첩 미지원, 가장 가까운 */ 에서 종료)

    preserve_lines=True 이면 블록 주석이 포함하던 개행 수만큼 개행을 남겨
    제거 후 텍스트의 라인 번호가 원본과 같게 유지됩니다.
    False 이면 주석을 통째로 제거하며, 이 경우 여러 줄 주석 뒤의 매칭 위치는
    원본 라인 목록 기준으로 계산해야 합니다 (기존 보고서와 동일한 계산).

    Example:
        stripper = CommentStripper()
        stripper.strip("int a; /* x\\ny */ int b; // c")
        # "int a; \\n int b; "
    """

    PATTERN = PATTERN_COMMENT

    def __init__(self, preserve_lines: bool = True):
        self.preserve_lines = preserve_lines

    def strip(self, text: str) -> str:
        if self.preserve_lines:
            return self.PATTERN.sub(self._keep_newlines, text)
        return self.PATTERN.sub("", text)

    @staticmethod
    def _keep_newlines(match: re.Match) -> str:
        return "\n" * match.group(0).count("\n")


def strip_comments(text: str, preserve_lines: bool = True) -> str:
    """CommentStripper(preserve_lines).strip(text) 단축 함수"""
    return CommentStripper(preserve_lines).strip(text)
