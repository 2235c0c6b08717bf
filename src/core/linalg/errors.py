"""
Linalg Errors — иерархия исключений для векторов и матриц

Два класса нарушений:
- Статические (shape/kind/element type): аналог ошибки компиляции.
  Наследуют TypeError и выбрасываются ДО обращения к любому элементу.
- Выход индекса за границы: нарушение предусловия доступа.
  Наследует IndexError.
"""


class LinalgError(Exception):
    """Базовое исключение для всех ошибок модуля linalg."""

    pass


class ShapeMismatchError(LinalgError, TypeError):
    """
    Несовместимые размерности операндов.

    Примеры: сложение 3-вектора с 4-вектором, матрица из 5 элементов
    для формы 2x3, скалярное произведение векторов разной длины.
    """

    pass


class ElementTypeMismatchError(LinalgError, TypeError):
    """
    Элемент или скаляр не приводится к типу элементов без потерь.

    Также выбрасывается, если операнды бинарной операции имеют
    разные типы элементов (например, Vector[int, 3] + Vector[float, 3]).
    """

    pass


class UnsupportedOperationError(LinalgError, TypeError):
    """
    Для пары видов операндов не зарегистрировано ни одного правила.

    Например matrix * matrix или matrix * vector: такие комбинации
    отклоняются явно, без подмены другой семантикой.
    """

    pass


class ElementIndexError(LinalgError, IndexError):
    """Индекс элемента вне фиксированных границ [0, N)."""

    pass
