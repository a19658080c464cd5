from enum import Enum


class Role(str, Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"


class PricingModel(str, Enum):
    FREE = "free"
    FREEMIUM = "freemium"
    PAID = "paid"
    CUSTOM = "custom"
