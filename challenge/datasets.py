"""
dataset registry.

which statistics exist, where their data comes from, and how likely they
are to have good country coverage. only high/medium availability datasets
are eligible for the daily rotation.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

HIGH = "high"
MEDIUM = "medium"
LOW = "low"

AVAILABILITY_TIERS = (HIGH, MEDIUM, LOW)
SUITABLE_TIERS = frozenset([HIGH, MEDIUM])

EXPANDED_CATEGORY = "Expanded Indicators"


@dataclass(frozen=True)
class DatasetDescriptor:
    id: str
    category: str
    availability_tier: str
    has_world_bank_data: bool = False
    has_owid_data: bool = False

    @property
    def is_suitable(self) -> bool:
        return self.availability_tier in SUITABLE_TIERS


@dataclass(frozen=True)
class DatasetCategory:
    name: str
    icon: str
    datasets: tuple[str, ...]


DATASET_CATEGORIES: dict[str, DatasetCategory] = {
    "DEMOGRAPHICS": DatasetCategory("Demographics & Society", "👥", (
        "population-density",
        "land-area",
        "population-total",
        "population-growth",
        "urban-population",
        "population-ages-65",
        "population-ages-0-14",
        "life-expectancy",
        "birth-rate",
        "death-rate",
        "fertility-rate",
        "infant-mortality",
        "literacy-rate",
        "literacy-rate-youth",
        "literacy-rate-adult-female",
    )),
    "CULTURAL_DIVERSITY": DatasetCategory("Cultural & Structural Diversity", "🌐", (
        "languages-count",
        "timezones-count",
    )),
    "ECONOMY": DatasetCategory("Economy & Development", "💰", (
        "gdp-per-capita",
        "gdp-total",
        "gdp-growth",
        "gni-per-capita",
        "unemployment-rate",
        "inflation-rate",
        "exports-goods-services",
        "imports-goods-services",
        "foreign-investment",
        "government-expenditure",
        "tax-revenue",
        "gross-savings",
        "manufacturing-value",
        "agriculture-value",
    )),
    "ENVIRONMENT": DatasetCategory("Environment & Climate", "🌍", (
        "forest-coverage",
        "methane-emissions",
        "renewable-energy",
        "energy-consumption",
        "energy-imports",
        "fossil-fuel-consumption",
        "electricity-consumption",
    )),
    "TECHNOLOGY": DatasetCategory("Technology & Innovation", "💻", (
        "internet-users",
        "mobile-subscriptions",
        "fixed-broadband",
        "telephone-lines",
    )),
    "HEALTH": DatasetCategory("Health & Wellbeing", "🏥", (
        "healthcare-expenditure",
        "hospital-beds",
        "physicians-density",
        "nurses-midwives",
        "immunization-dpt",
        "immunization-measles",
        "maternal-mortality",
        "tuberculosis-incidence",
    )),
    "EDUCATION": DatasetCategory("Education & Knowledge", "🎓", (
        "education-expenditure",
        "secondary-enrollment",
        "tertiary-enrollment",
        "literacy-rate-youth",
    )),
    "INFRASTRUCTURE": DatasetCategory("Infrastructure & Transport", "🚧", (
        "electricity-access",
        "water-access",
        "sanitation-access",
        "roads-paved",
        "rail-lines",
        "air-passengers",
    )),
    "CULTURE": DatasetCategory("Culture & Lifestyle", "🎭", (
        "coffee-consumption",
        "alcohol-consumption",
    )),
}

# dataset id -> World Bank indicator code
WORLD_BANK_INDICATORS: dict[str, str] = {
    "population-density": "EN.POP.DNST",
    "gdp-per-capita": "NY.GDP.PCAP.CD",
    "life-expectancy": "SP.DYN.LE00.IN",
    "internet-users": "IT.NET.USER.ZS",
    "literacy-rate": "SE.ADT.LITR.ZS",
    "unemployment-rate": "SL.UEM.TOTL.ZS",
    "forest-coverage": "AG.LND.FRST.ZS",
    "urban-population": "SP.URB.TOTL.IN.ZS",

    # demographics
    "birth-rate": "SP.DYN.CBRT.IN",
    "death-rate": "SP.DYN.CDRT.IN",
    "fertility-rate": "SP.DYN.TFRT.IN",
    "population-growth": "SP.POP.GROW",
    "infant-mortality": "SP.DYN.IMRT.IN",
    "population-total": "SP.POP.TOTL",
    "population-ages-65": "SP.POP.65UP.TO.ZS",
    "population-ages-0-14": "SP.POP.0014.TO.ZS",

    # economy
    "inflation-rate": "FP.CPI.TOTL.ZG",
    "gdp-growth": "NY.GDP.MKTP.KD.ZG",
    "gdp-total": "NY.GDP.MKTP.CD",
    "gni-per-capita": "NY.GNP.PCAP.CD",
    "exports-goods-services": "NE.EXP.GNFS.ZS",
    "imports-goods-services": "NE.IMP.GNFS.ZS",
    "foreign-investment": "BX.KLT.DINV.WD.GD.ZS",
    "government-expenditure": "GC.XPN.TOTL.GD.ZS",
    "tax-revenue": "GC.TAX.TOTL.GD.ZS",
    "gross-savings": "NY.GNS.ICTR.ZS",
    "manufacturing-value": "NV.IND.MANF.ZS",
    "agriculture-value": "NV.AGR.TOTL.ZS",

    # health
    "healthcare-expenditure": "SH.XPD.CHEX.GD.ZS",
    "hospital-beds": "SH.MED.BEDS.ZS",
    "physicians-density": "SH.MED.PHYS.ZS",
    "nurses-midwives": "SH.MED.NUMW.P3",
    "immunization-dpt": "SH.IMM.IDPT",
    "immunization-measles": "SH.IMM.MEAS",
    "maternal-mortality": "SH.STA.MMRT",
    "tuberculosis-incidence": "SH.TBS.INCD",

    # education
    "education-expenditure": "SE.XPD.TOTL.GD.ZS",
    "secondary-enrollment": "SE.SEC.NENR",
    "tertiary-enrollment": "SE.TER.ENRR",
    "literacy-rate-youth": "SE.ADT.1524.LT.ZS",

    # infrastructure & technology
    "electricity-access": "EG.ELC.ACCS.ZS",
    "electricity-consumption": "EG.USE.ELEC.KH.PC",
    "mobile-subscriptions": "IT.CEL.SETS.P2",
    "fixed-broadband": "IT.NET.BBND.P2",
    "telephone-lines": "IT.MLT.MAIN.P2",
    "roads-paved": "IS.ROD.PAVE.ZS",
    "rail-lines": "IS.RRS.TOTL.KM",
    "air-passengers": "IS.AIR.PSGR",
    "water-access": "SH.H2O.BASW.ZS",
    "sanitation-access": "SH.STA.BASS.ZS",

    # energy & environment
    "energy-consumption": "EG.USE.COMM.KT.OE",
    "renewable-energy": "EG.FEC.RNEW.ZS",
    "methane-emissions": "EN.ATM.METH.KT.CE",
    "energy-imports": "EG.IMP.CONS.ZS",
    "fossil-fuel-consumption": "EG.USE.COMM.FO.ZS",

    # expanded: not listed in any category
    "female-population-percent": "SP.POP.TOTL.FE.ZS",
    "dependency-ratio": "SP.POP.DPND",
    "life-expectancy-female": "SP.DYN.LE00.FE.IN",
    "life-expectancy-male": "SP.DYN.LE00.MA.IN",
    "adolescent-fertility-rate": "SP.ADO.TFRT",
    "labor-force-participation-female": "SL.TLF.ACTI.FE.ZS",
    "refugee-population": "SM.POP.REFG",
    "net-migration": "SM.POP.NETM",
    "gdp-per-capita-ppp": "NY.GDP.PCAP.PP.CD",
    "services-value-added-percent-gdp": "NV.SRV.TOTL.ZS",
    "industry-value-added-percent-gdp": "NV.IND.TOTL.ZS",
    "current-account-balance": "BN.CAB.XOKA.CD",
    "high-technology-exports-percent-manufactured": "TX.VAL.TECH.MF.ZS",
    "research-development-expenditure-percent-gdp": "GB.XPD.RSDV.GD.ZS",
    "trade-percent-gdp": "NE.TRD.GNFS.ZS",
    "remittance-inflows-percent-gdp": "BX.TRF.PWKR.DT.GD.ZS",
    "unemployment-youth-total": "SL.UEM.1524.ZS",
    "military-expenditure-percent-gdp": "MS.MIL.XPND.GD.ZS",
    "total-reserves-in-months-imports": "FI.RES.TOTL.MO",
    "primary-enrollment-net": "SE.PRM.NENR",
    "pupil-teacher-ratio-primary": "SE.PRM.ENRL.TC.ZS",
    "education-completion-primary": "SE.PRM.CMPT.ZS",
    "mortality-under-5": "SH.DYN.MORT",
    "obesity-prevalence-female": "SH.STA.OB18.FE.ZS",
    "diabetes-prevalence-total": "SH.STA.DIAB.ZS",
    "births-attended-by-skilled-staff": "SH.STA.BRTC.ZS",
    "mental-health-proxy-suicide-rate": "SH.STA.SUIC.P5",
    "broadband-subscriptions-mobile": "IT.CEL.BBND.P2",
    "internet-secure-servers": "IT.NET.SECR.P6",
    "renewable-electricity-percent-total": "EG.ELC.RNEW.ZS",
    "access-clean-fuels-cooking": "EG.CFT.ACCS.ZS",
    "logistics-performance-index": "LP.LPI.OVRL.XQ",
    "co2-emissions-per-capita": "EN.ATM.CO2E.PC",
    "agricultural-land-percent-land-area": "AG.LND.AGRI.ZS",
    "terrestrial-protected-areas-percent-total": "ER.LND.PTLD.ZS",
    "threatened-mammal-species": "EN.MAM.THRD.NO",
    "intentional-homicides-per-100k": "VC.IHR.PSRC.P5",
    "female-parliament-percent": "SG.GEN.PARL.ZS",
    "rule-of-law-estimate": "RL.EST",
    "control-of-corruption-estimate": "CC.EST",
    "political-stability-estimate": "PV.EST",
}

# dataset id -> Our World in Data dataset slug
OWID_DATASETS: dict[str, str] = {
    "coffee-consumption": "coffee-per-capita",
    "alcohol-consumption": "alcohol-consumption-per-capita",
}

# curated static data, no live API needed
STATIC_MEDIUM_DATASETS = frozenset(["land-area", "languages-count", "timezones-count"])

# the recognisable maps most players can reason about
FEATURED_DATASETS: tuple[str, ...] = (
    "population-density",
    "population-total",
    "urban-population",
    "life-expectancy",
    "birth-rate",
    "fertility-rate",
    "infant-mortality",
    "literacy-rate",
    "land-area",
    "languages-count",
    "timezones-count",
    "gdp-per-capita",
    "gdp-total",
    "unemployment-rate",
    "inflation-rate",
    "forest-coverage",
    "renewable-energy",
    "electricity-consumption",
    "internet-users",
    "mobile-subscriptions",
    "hospital-beds",
    "physicians-density",
    "tertiary-enrollment",
    "electricity-access",
    "water-access",
    "rail-lines",
    "air-passengers",
    "coffee-consumption",
    "alcohol-consumption",
    "co2-emissions-per-capita",
    "military-expenditure-percent-gdp",
    "female-parliament-percent",
)


def dataset_availability(dataset_id: str) -> str:
    """estimate how likely a dataset is to load with good coverage."""
    if dataset_id in WORLD_BANK_INDICATORS:
        return HIGH
    if dataset_id in OWID_DATASETS:
        return MEDIUM
    if dataset_id in STATIC_MEDIUM_DATASETS:
        return MEDIUM
    return LOW


def _descriptor(dataset_id: str, category: str) -> DatasetDescriptor:
    return DatasetDescriptor(
        id=dataset_id,
        category=category,
        availability_tier=dataset_availability(dataset_id),
        has_world_bank_data=dataset_id in WORLD_BANK_INDICATORS,
        has_owid_data=dataset_id in OWID_DATASETS,
    )


def all_datasets() -> list[DatasetDescriptor]:
    """
    every known dataset, sorted by id.

    category datasets come first (first category wins for ids listed
    twice), then any World Bank indicator not in a category. sorting keeps
    the shuffle input stable when the registry is edited.
    """
    out: list[DatasetDescriptor] = []
    seen: set[str] = set()

    for category in DATASET_CATEGORIES.values():
        for dataset_id in category.datasets:
            if dataset_id in seen:
                continue
            seen.add(dataset_id)
            out.append(_descriptor(dataset_id, category.name))

    for dataset_id in WORLD_BANK_INDICATORS:
        if dataset_id in seen:
            continue
        seen.add(dataset_id)
        out.append(_descriptor(dataset_id, EXPANDED_CATEGORY))

    out.sort(key=lambda d: d.id)
    return out


def suitable_pool(descriptors: Iterable[DatasetDescriptor] | None = None) -> list[DatasetDescriptor]:
    """
    filter to the high/medium tiers, dropping duplicate ids.

    args:
        descriptors: defaults to all_datasets()

    returns:
        suitable descriptors in input order
    """
    if descriptors is None:
        descriptors = all_datasets()

    pool: list[DatasetDescriptor] = []
    seen: set[str] = set()
    for d in descriptors:
        if not d.is_suitable or d.id in seen:
            continue
        seen.add(d.id)
        pool.append(d)
    return pool


def search_datasets(term: str, descriptors: Iterable[DatasetDescriptor] | None = None) -> list[DatasetDescriptor]:
    """datasets whose id contains `term` (case-insensitive)."""
    if descriptors is None:
        descriptors = all_datasets()
    needle = term.lower()
    return [d for d in descriptors if needle in d.id.lower()]


def category_counts(descriptors: Sequence[DatasetDescriptor]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for d in descriptors:
        counts[d.category] = counts.get(d.category, 0) + 1
    return counts


def category_icon(category_name: str | None) -> str:
    """icon for a category display name, with a generic default."""
    for category in DATASET_CATEGORIES.values():
        if category.name == category_name:
            return category.icon
    return "📊"
