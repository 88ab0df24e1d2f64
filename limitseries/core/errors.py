"""
Engine errors

Исключения движка вычисления пределов. Внутри компонентов они
выбрасываются, а на границе Trimmer.trim / LimitEngine.find_limit
конвертируются в результат с FailureKind — через границы компонентов
они не пропагируют.
"""

from enum import Enum


class FailureKind(str, Enum):
    """
    Причина отказа движка.

    OUT_OF_FUEL: trimming не уложился в бюджет (повтор с большим fuel)
    NOT_WELL_ORDERED: входной multiseries нарушает убывание показателей
    ORACLE_INCONSISTENCY: SignOracle дал разные ответы на равные входы
    """

    OUT_OF_FUEL = "OUT_OF_FUEL"
    NOT_WELL_ORDERED = "NOT_WELL_ORDERED"
    ORACLE_INCONSISTENCY = "ORACLE_INCONSISTENCY"


class LimitEngineError(Exception):
    """Базовое исключение движка; failure_kind задаёт FailureKind результата."""

    failure_kind: FailureKind


class OutOfFuelError(LimitEngineError):
    """
    Trimming не уложился в бюджет fuel.

    Восстановимо: вызывающий может повторить с большим fuel или
    сообщить "предел не определён".
    """

    failure_kind = FailureKind.OUT_OF_FUEL


class NotWellOrderedError(LimitEngineError):
    """
    Показатели multiseries не убывают строго.

    Нарушение контракта производителем multiseries: текущий вызов
    прерывается, процесс — нет.
    """

    failure_kind = FailureKind.NOT_WELL_ORDERED


class OracleInconsistencyError(LimitEngineError):
    """
    SignOracle вернул разные знаки для равных входов в одном проходе.

    Фатально для текущего вызова: нарушено базовое допущение о
    детерминированности oracle.
    """

    failure_kind = FailureKind.ORACLE_INCONSISTENCY
