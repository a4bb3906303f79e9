"""
Хеширование и проверка паролей.

bcrypt с солью и настраиваемой стоимостью (work factor).
Ошибки bcrypt не подменяются ответом «не совпало» и уходят наверх.
"""

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt учитывает только первые 72 байта пароля
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Хеш с новой солью; открытый пароль нигде не сохраняется"""
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        # такой пароль не мог быть захеширован, а усечение дало бы ложное совпадение
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
