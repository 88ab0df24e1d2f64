"""
LazySequence — ленивая, возможно бесконечная последовательность

Последовательность строится корекурсией: из начального seed и функции step,
которая на каждом шаге возвращает либо DONE (последовательность исчерпана),
либо Next(value, next_seed). Позиция n последовательности — это n-я эмиссия
step, начиная с seed; DONE отображается в "отсутствие" элемента.

Все производные операции (map, zip, fold, append, enumerate) определены через
corecurse над составным seed и ничего не вычисляют заранее.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Monotone exhaustion: если позиция n отсутствует, отсутствуют все позиции >= n
2. Каждая позиция вычисляется не более одного раза (memo cells)
3. Вычисленный prefix разделяется read-only между последовательностью и её tail
4. Чтение позиции n у map/fold/zip/enumerate форсирует ровно n+1 upstream-элементов
5. force — единственная операция с эффектом (продвижение генератора)
"""

import numbers
import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Iterable, Iterator, Optional, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


# =============================================================================
# EMISSION
# =============================================================================


class _Done:
    """Эмиссия "последовательность исчерпана" (singleton DONE)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "DONE"


DONE = _Done()


@dataclass(frozen=True)
class Next(Generic[T]):
    """Эмиссия очередного элемента и следующего seed."""

    value: T
    seed: Any


Emission = Union[_Done, Next]
Step = Callable[[Any], Emission]

_ABSENT = object()


# =============================================================================
# STREAM (memo cells + generator state)
# =============================================================================


class _Stream:
    """
    Разделяемое состояние генератора.

    Хранит уже вычисленные элементы (cells) и текущие (seed, step).
    После исчерпания seed и step освобождаются, флаг exhausted больше
    никогда не сбрасывается.
    """

    __slots__ = ("cells", "seed", "step", "exhausted", "_forcing")

    def __init__(self, seed: Any, step: Optional[Step]):
        self.cells: list = []
        self.seed = seed
        self.step = step
        self.exhausted = step is None
        self._forcing = False

    def force(self, index: int) -> Any:
        """Форсирует позиции до index включительно, возвращает элемент или _ABSENT."""
        cells = self.cells
        if index < len(cells):
            return cells[index]
        if self.exhausted:
            return _ABSENT
        if self._forcing:
            raise RuntimeError("re-entrant force of a lazy sequence from its own step")

        self._forcing = True
        try:
            while len(cells) <= index:
                emission = self.step(self.seed)
                if emission is DONE:
                    self.exhausted = True
                    self.seed = None
                    self.step = None
                    break
                if not isinstance(emission, Next):
                    raise TypeError(
                        f"step must return DONE or Next(value, seed), got {emission!r}"
                    )
                cells.append(emission.value)
                self.seed = emission.seed
        finally:
            self._forcing = False

        if index < len(cells):
            return cells[index]
        return _ABSENT


def _forward(seq: "LazySequence") -> Emission:
    """Step, который просто разворачивает seq (используется prepend)."""
    split = seq.destruct()
    if split is None:
        return DONE
    head, tail = split
    return Next(head, tail)


def _seed_key(seed: Any) -> Optional[Hashable]:
    """
    Неизменяемое представление seed или None.

    Принимаются только значения, которые step не может изменить:
    числа, строки, None, кортежи и frozenset из них, а также вложенные
    LazySequence (через их state_key).
    """
    if seed is None or isinstance(seed, (numbers.Number, str, bytes)):
        return ("value", type(seed), seed)
    if isinstance(seed, LazySequence):
        inner = seed.state_key()
        if inner is None:
            return None
        return ("seq", inner)
    if isinstance(seed, (tuple, frozenset)):
        parts = []
        for part in seed:
            key = _seed_key(part)
            if key is None:
                return None
            parts.append(key)
        if isinstance(seed, frozenset):
            return ("frozenset", frozenset(parts))
        return ("tuple", tuple(parts))
    return None


# =============================================================================
# LAZY SEQUENCE
# =============================================================================


class LazySequence(Generic[T]):
    """
    Ленивая последовательность поверх разделяемого _Stream.

    Экземпляр — это view (stream, offset): tail() и drop(n) не копируют
    данные, а сдвигают offset в тех же memo cells.
    """

    __slots__ = ("_stream", "_offset")

    def __init__(self, stream: _Stream, offset: int = 0):
        self._stream = stream
        self._offset = offset

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def corecurse(cls, seed: Any, step: Step) -> "LazySequence":
        """
        Последовательность эмиссий step, начиная с seed.

        Args:
            seed: Начальное состояние
            step: seed → DONE | Next(value, next_seed)

        Returns:
            Новая LazySequence (ничего не вычислено)
        """
        return cls(_Stream(seed, step))

    @classmethod
    def empty(cls) -> "LazySequence":
        """Пустая последовательность."""
        return cls(_Stream(None, None))

    @classmethod
    def prepend(cls, head: T, tail: "LazySequence[T]") -> "LazySequence[T]":
        """
        Последовательность head, затем tail.

        Голова кладётся сразу в memo cell, остальное разворачивается из tail.
        """
        stream = _Stream(tail, _forward)
        stream.cells.append(head)
        return cls(stream)

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> "LazySequence[T]":
        """Ленивая обёртка над iterable (конечным или бесконечным)."""
        iterator = iter(items)

        def step(it: Iterator[T]) -> Emission:
            try:
                value = next(it)
            except StopIteration:
                return DONE
            return Next(value, it)

        return cls.corecurse(iterator, step)

    @classmethod
    def repeat(cls, value: T) -> "LazySequence[T]":
        """Бесконечная последовательность value, value, ..."""
        return cls.corecurse(None, lambda _: Next(value, None))

    @classmethod
    def iterate(cls, seed: T, f: Callable[[T], T]) -> "LazySequence[T]":
        """Бесконечная орбита seed, f(seed), f(f(seed)), ..."""
        return cls.corecurse(seed, lambda x: Next(x, f(x)))

    # -------------------------------------------------------------------------
    # Доступ к элементам
    # -------------------------------------------------------------------------

    def force(self, n: int) -> bool:
        """
        Форсирует позицию n.

        Returns:
            True если позиция n присутствует, False если последовательность
            исчерпана раньше
        """
        if n < 0:
            raise ValueError(f"index must be non-negative, got {n}")
        return self._stream.force(self._offset + n) is not _ABSENT

    def get(self, n: int) -> Optional[T]:
        """Элемент на позиции n или None, если позиция отсутствует."""
        if n < 0:
            raise ValueError(f"index must be non-negative, got {n}")
        value = self._stream.force(self._offset + n)
        if value is _ABSENT:
            return None
        return value

    def is_exhausted_at(self, n: int) -> bool:
        return not self.force(n)

    def is_empty(self) -> bool:
        return not self.force(0)

    def head(self) -> Optional[T]:
        return self.get(0)

    def tail(self) -> "LazySequence[T]":
        """Последовательность без первого элемента (tail пустой — пустая)."""
        return LazySequence(self._stream, self._offset + 1)

    def drop(self, n: int) -> "LazySequence[T]":
        if n < 0:
            raise ValueError(f"drop count must be non-negative, got {n}")
        return LazySequence(self._stream, self._offset + n)

    def destruct(self) -> Optional[tuple[T, "LazySequence[T]"]]:
        """
        Разбор на (head, tail).

        Returns:
            None для пустой последовательности, иначе (head, tail)
        """
        value = self._stream.force(self._offset)
        if value is _ABSENT:
            return None
        return value, self.tail()

    def take(self, n: int) -> list[T]:
        """Eager prefix длины не более n."""
        if n < 0:
            raise ValueError(f"take count must be non-negative, got {n}")
        result = []
        for i in range(n):
            value = self._stream.force(self._offset + i)
            if value is _ABSENT:
                break
            result.append(value)
        return result

    def __iter__(self) -> Iterator[T]:
        index = self._offset
        while True:
            value = self._stream.force(index)
            if value is _ABSENT:
                return
            yield value
            index += 1

    @property
    def position(self) -> int:
        """Смещение view относительно начала разделяемого stream."""
        return self._offset

    @property
    def forced_count(self) -> int:
        """Сколько элементов этого view уже вычислено (memo cells)."""
        return max(0, len(self._stream.cells) - self._offset)

    def state_key(self) -> Optional[Hashable]:
        """
        Ключ, полностью определяющий остаток последовательности.

        Остаток view = уже вычисленные cells[offset:] + развёртка step с
        текущего seed. Ключ — (step, seed, pending) для незавершённого
        генератора и (DONE, pending) для исчерпанного. Равные ключи дают
        равные остатки при чистом step.

        Returns:
            None, если остаток по состоянию не определяется: seed изменяемый
            (например, iterator в from_iterable) или элементы не хешируемы
        """
        stream = self._stream
        pending = tuple(stream.cells[self._offset:])
        try:
            hash(pending)
        except TypeError:
            return None

        if stream.exhausted:
            return (DONE, pending)

        # Позиции между концом cells и offset ещё не вычислены
        gap = self._offset - len(stream.cells)
        seed = _seed_key(stream.seed)
        if seed is None:
            return None
        return (stream.step, seed, max(gap, 0), pending)

    # -------------------------------------------------------------------------
    # Производные последовательности
    # -------------------------------------------------------------------------

    def map(self, f: Callable[[T], U]) -> "LazySequence[U]":
        def step(seq: LazySequence[T]) -> Emission:
            split = seq.destruct()
            if split is None:
                return DONE
            head, tail = split
            return Next(f(head), tail)

        return LazySequence.corecurse(self, step)

    def zip(self, other: "LazySequence[U]") -> "LazySequence[tuple[T, U]]":
        """Попарная последовательность; исчерпывается вместе с более короткой."""

        def step(seed: tuple) -> Emission:
            left, right = seed
            split_left = left.destruct()
            if split_left is None:
                return DONE
            split_right = right.destruct()
            if split_right is None:
                return DONE
            return Next(
                (split_left[0], split_right[0]),
                (split_left[1], split_right[1]),
            )

        return LazySequence.corecurse((self, other), step)

    def fold(self, init: A, f: Callable[[A, T], A]) -> "LazySequence[A]":
        """
        Последовательность накопленных значений.

        Позиция n равна f(...f(f(init, a0), a1)..., an); для бесконечного
        входа результат тоже бесконечен.
        """

        def step(seed: tuple) -> Emission:
            acc, seq = seed
            split = seq.destruct()
            if split is None:
                return DONE
            head, tail = split
            acc = f(acc, head)
            return Next(acc, (acc, tail))

        return LazySequence.corecurse((init, self), step)

    def append(self, other: "LazySequence[T]") -> "LazySequence[T]":
        """
        Конкатенация self ++ other.

        Seed: (on_right, seq) — флаг активной стороны и текущая позиция.
        Если self бесконечна, other никогда не форсируется.
        """

        def step(seed: tuple) -> Emission:
            on_right, seq = seed
            while True:
                split = seq.destruct()
                if split is not None:
                    head, tail = split
                    return Next(head, (on_right, tail))
                if on_right:
                    return DONE
                on_right, seq = True, other

        return LazySequence.corecurse((False, self), step)

    def enumerate(self, start: int = 0) -> "LazySequence[tuple[int, T]]":
        def step(seed: tuple) -> Emission:
            index, seq = seed
            split = seq.destruct()
            if split is None:
                return DONE
            head, tail = split
            return Next((index, head), (index + 1, tail))

        return LazySequence.corecurse((start, self), step)

    def __repr__(self) -> str:
        forced = self._stream.cells[self._offset:]
        suffix = "" if self._stream.exhausted else ", ..."
        items = ", ".join(repr(item) for item in forced)
        if not items:
            return "LazySequence([])" if self._stream.exhausted else "LazySequence([...])"
        return f"LazySequence([{items}{suffix}])"


# =============================================================================
# ФУНКЦИИ
# =============================================================================


def prefix_equal(
    a: LazySequence,
    b: LazySequence,
    n: int,
    eq: Callable[[Any, Any], bool] = operator.eq,
) -> bool:
    """
    Сравнение prefix длины n (операционное равенство до границы).

    Позиции, отсутствующие в обеих последовательностях, считаются равными;
    отсутствие только с одной стороны — неравенство.
    """
    for i in range(n):
        present_a = a.force(i)
        present_b = b.force(i)
        if present_a != present_b:
            return False
        if not present_a:
            return True
        if not eq(a.get(i), b.get(i)):
            return False
    return True
