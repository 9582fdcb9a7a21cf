"""
Errors — единственный тип ошибки арифметики fixdec

IllegalOperation поднимается только при политике throw_on_error=True, когда
операция математически не определена для конечных аргументов:
- деление / остаток от деления на ноль
- логарифм неположительного числа
- аргумент обратной тригонометрической / гиперболической функции вне домена
- факториал отрицательного или нецелого числа
- переполнение (|x| >= 10**decimals)
- невалидные цифры при конструировании

При политике silent-degrade те же условия дают NaN или знаковую Infinity.
"""

from typing import Any, Optional


class IllegalOperation(ArithmeticError):
    """
    Недопустимая операция над Decimal.

    Args:
        message: Человекочитаемое описание
        operation: Имя операции (например, 'divide', 'ln'), если известно
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Представление для логирования / сериализации."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "operation": self.operation,
        }
