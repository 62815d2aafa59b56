class GenderCategory:
    MALE = 'male'
    FEMALE = 'female'
    NEUTRAL = 'neutral'
    ALL = (MALE, FEMALE, NEUTRAL)
    ALIASES = {'men': MALE, 'man': MALE, 'women': FEMALE, 'woman': FEMALE, 'unisex': NEUTRAL}
    DEFAULT = NEUTRAL


class AgeGroup:
    ADULT = 'adult'
    CHILD = 'child'
    BOYS = 'boys'
    GIRLS = 'girls'
    NEUTRAL = 'neutral'
    ALL = (ADULT, CHILD, BOYS, GIRLS, NEUTRAL)
    ALIASES = {'adults': ADULT, 'children': CHILD, 'kids': CHILD, 'all': NEUTRAL}
    DEFAULT = NEUTRAL


class Condition:
    NEW = 'new'
    USED = 'used'
    REFURBISHED = 'refurbished'
    WASHED = 'washed'
    ALL = (NEW, USED, REFURBISHED, WASHED)
    ALIASES = {}
    DEFAULT = NEW


class PendingSaleStatus:
    PENDING = 'pending'
    SYNCING = 'syncing'
    FAILED = 'failed'


class StockFilter:
    IN_STOCK = 'instock'
    OUT_OF_STOCK = 'outofstock'


SHOE_CODE_SEQUENCE_WIDTH = 3
SHOE_CODE_SIZE_WIDTH = 2
SHOE_CODE_COLOR_LENGTH = 3

DASHBOARD_CACHE_KEY = 'dashboard_stats'
