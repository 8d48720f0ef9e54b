from enum import Enum


class StoreBackend(str, Enum):
    MEMORY = "memory"
    REDIS = "redis"

    def __str__(self):
        return self.value


class SignatureCheck(str, Enum):
    DISABLED = "disabled"
    ENFORCED = "enforced"

    def __str__(self):
        return self.value
