"""PHPソースのテキスト・構造ヒューリスティック用ヘルパー。

完全な構文解析は行わない。文字列リテラルとコメントの中身を空白で塗りつぶした
「マスク済みソース」を作り、括弧の対応やトークン検出はマスク済みソース上で行う。
マスク後も文字数と改行位置は元のソースと一致する。
"""

import bisect
import re
from dataclasses import dataclass

_METHOD_RE = re.compile(r"\bfunction\s+&?\s*(\w+)\s*\(")


def mask_source(text: str) -> str:
    """文字列リテラルの中身とコメントを空白に置き換える。引用符自体は残す。"""
    out = list(text)
    n = len(text)

    def blank(start: int, end: int) -> None:
        for k in range(start, min(end, n)):
            if out[k] != "\n":
                out[k] = " "

    i = 0
    while i < n:
        c = text[i]
        if c == "'" or c == '"':
            j = i + 1
            while j < n and text[j] != c:
                if text[j] == "\\":
                    j += 1
                j += 1
            blank(i + 1, j)
            i = j + 1
        elif text.startswith("//", i) or (c == "#" and not text.startswith("#[", i)):
            j = text.find("\n", i)
            j = n if j == -1 else j
            blank(i, j)
            i = j
        elif text.startswith("/*", i):
            j = text.find("*/", i + 2)
            j = n if j == -1 else j + 2
            blank(i, j)
            i = j
        else:
            i += 1
    return "".join(out)


def find_matching(masked: str, open_index: int) -> int:
    """open_indexの開き括弧に対応する閉じ括弧の位置を返す。見つからなければ-1。"""
    opener = masked[open_index]
    closer = {"(": ")", "{": "}", "[": "]"}[opener]
    depth = 0
    for i in range(open_index, len(masked)):
        ch = masked[i]
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
    return -1


def find_opening(masked: str, close_index: int) -> int:
    """close_indexの閉じ括弧に対応する開き括弧の位置を返す。見つからなければ-1。"""
    closer = masked[close_index]
    opener = {")": "(", "}": "{", "]": "["}[closer]
    depth = 0
    for i in range(close_index, -1, -1):
        ch = masked[i]
        if ch == closer:
            depth += 1
        elif ch == opener:
            depth -= 1
            if depth == 0:
                return i
    return -1


class LineIndex:
    """文字オフセットから1始まりの行番号を引く。"""

    def __init__(self, text: str) -> None:
        self._starts = [0] + [m.end() for m in re.finditer("\n", text)]

    def line_of(self, offset: int) -> int:
        return bisect.bisect_right(self._starts, offset)


@dataclass(frozen=True)
class MethodBody:
    """メソッド本体の範囲（波括弧を含む）。"""

    name: str
    start: int
    end: int


def method_bodies(masked: str) -> list[MethodBody]:
    """`function name(...) {...}` 形式のメソッド本体を列挙する。

    抽象メソッドなど本体を持たない宣言と、括弧の対応が取れない宣言は除外する。
    """
    bodies: list[MethodBody] = []
    for match in _METHOD_RE.finditer(masked):
        params_end = find_matching(masked, match.end() - 1)
        if params_end == -1:
            continue
        brace = _next_body_start(masked, params_end + 1)
        if brace == -1:
            continue
        body_end = find_matching(masked, brace)
        if body_end == -1:
            continue
        bodies.append(MethodBody(name=match.group(1), start=brace, end=body_end + 1))
    return bodies


def _next_body_start(masked: str, index: int) -> int:
    # 戻り値型宣言を読み飛ばし、最初の '{' か ';' を探す
    for i in range(index, len(masked)):
        ch = masked[i]
        if ch == "{":
            return i
        if ch == ";":
            return -1
    return -1


def string_argument(text: str, masked: str, quote_index: int) -> str | None:
    """quote_indexの引用符で始まる文字列リテラルの中身を元のソースから取り出す。"""
    quote = masked[quote_index]
    end = masked.find(quote, quote_index + 1)
    if end == -1:
        return None
    return text[quote_index + 1 : end]
