# ------------------------------- Constants -------------------------------
# Maintenance hydration protocol: each zone runs 5 min, zones run one after
# another, then the system pauses for a break that depends on the zone count.
from types import MappingProxyType

MAX_ZONES = 9
MAX_SYSTEMS = 5

RUN_MINUTES_PER_ZONE = 5.0      # min, fixed per zone

BREAK_MINUTES = MappingProxyType({
    1: 30.0,
    2: 25.0,
    3: 20.0,
    4: 15.0,
    5: 10.0,
    6: 5.0,
    7: 2.0,
    8: 2.0,
    9: 2.0,
})
if set(BREAK_MINUTES) != set(range(1, MAX_ZONES + 1)):
    raise RuntimeError("Break table must cover zone counts 1..%d exactly" % MAX_ZONES)

FOAM_MIX_RATIO = 0.0025         # 0.25 % of solution flow is concentrate
FOAM_TANK_OPTIONS = (0, 25, 50, 100, 150)   # gal; 0 means no foam
FOAM_DEFAULT = 50               # gal, standard tank

GAL_PER_FT3 = 7.48              # gal per cubic foot

# ------------------------------- Page defaults ---------------------------
DEFAULT_ZONES = 6
DEFAULT_ZONE_GPM = 20.0
DEFAULT_SYSTEM_COUNT = 1
DEFAULT_SOURCE_GALLONS = 20000.0
DEFAULT_REFILL_GPM = 0.0

POOL_SHAPES = ("rect", "circle")
DEFAULT_POOL = dict(
    shape="rect", length=30.0, width=15.0, diameter=20.0,
    shallow_depth=3.5, deep_depth=6.0,
)
