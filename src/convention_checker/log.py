"""loguruのシンク設定。"""

import sys

from loguru import logger


def _stderr_sink(message: str) -> None:
    # 実行時点のsys.stderrへ書き込む（テスト時の差し替えにも追従する）
    sys.stderr.write(message)


def configure_logging(level: str = "WARNING") -> None:
    """標準エラー出力へのシンクを1つだけ設定する。

    loguruの既定シンクを含む既存シンクを取り除いてから追加するため、
    複数回呼び出してもシンクは重複しない。
    """
    logger.remove()
    logger.add(
        _stderr_sink,
        level=level.upper(),
        format="{time:HH:mm:ss} | {level: <8} | {name}: {message}",
        colorize=False,
        backtrace=False,
        diagnose=False,
    )
