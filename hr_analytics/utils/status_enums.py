# hr_analytics/utils/status_enums.py

from enum import Enum
from typing import Optional, Union


class EmploymentStatus(Enum):
    """Enumeration of employment statuses."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    OTHER = "Other"


class Gender(Enum):
    """Enumeration of recognised genders."""

    MALE = "Male"
    FEMALE = "Female"
    UNSPECIFIED = "Unspecified"


class ContractType(Enum):
    """Enumeration of contract categories."""

    PERMANENT = "Permanent"
    FIXED_TERM = "Fixed-term"
    APPRENTICESHIP = "Apprenticeship"
    INTERNSHIP = "Internship"
    TEMP_AGENCY = "Temp agency"
    OTHER = "Other"


class Sector(Enum):
    """Business sectors with published benchmarks."""

    INDUSTRY = "industry"
    SERVICES = "services"
    RETAIL = "retail"
    TECH = "tech"


class ExitReason(Enum):
    """Broad classification of a departure."""

    VOLUNTARY = "Voluntary"
    INVOLUNTARY = "Involuntary"
    UNKNOWN = "Unknown"


_STATUS_ALIASES = {
    "ACTIVE": EmploymentStatus.ACTIVE,
    "ACTIF": EmploymentStatus.ACTIVE,
    "ACTIVE EMPLOYEE": EmploymentStatus.ACTIVE,
    "INACTIVE": EmploymentStatus.INACTIVE,
    "INACTIF": EmploymentStatus.INACTIVE,
}

_GENDER_ALIASES = {
    "M": Gender.MALE,
    "H": Gender.MALE,
    "MALE": Gender.MALE,
    "MAN": Gender.MALE,
    "HOMME": Gender.MALE,
    "F": Gender.FEMALE,
    "W": Gender.FEMALE,
    "FEMALE": Gender.FEMALE,
    "WOMAN": Gender.FEMALE,
    "FEMME": Gender.FEMALE,
}

# Exact matches
_CONTRACT_ALIASES = {
    "CDI": ContractType.PERMANENT,
    "PERMANENT": ContractType.PERMANENT,
    "CDD": ContractType.FIXED_TERM,
    "TEMPORARY": ContractType.FIXED_TERM,
    "FIXED-TERM": ContractType.FIXED_TERM,
    "FIXED TERM": ContractType.FIXED_TERM,
    "STAGE": ContractType.INTERNSHIP,
    "STAGIAIRE": ContractType.INTERNSHIP,
    "INTERN": ContractType.INTERNSHIP,
    "INTERNSHIP": ContractType.INTERNSHIP,
    "INTERIM": ContractType.TEMP_AGENCY,
    "INTÉRIM": ContractType.TEMP_AGENCY,
    "TEMPORARY WORKER": ContractType.TEMP_AGENCY,
    "TEMP AGENCY": ContractType.TEMP_AGENCY,
}

# Substring matches
_APPRENTICESHIP_KEYWORDS = ("ALTERNANCE", "APPRENTISSAGE", "APPRENTICE", "CONTRAT PRO")

_SECTOR_ALIASES = {
    "INDUSTRIE": Sector.INDUSTRY,
    "SERVICE": Sector.SERVICES,
    "COMMERCE": Sector.RETAIL,
}

# Checked in order: "involuntary" contains "voluntary"
_INVOLUNTARY_KEYWORDS = (
    "INVOLUNTARY", "DISMISS", "LICENCIEMENT", "LAYOFF", "TERMINATION",
    "END OF CONTRACT", "FIN DE CONTRAT", "FIN DE CDD",
)
_VOLUNTARY_KEYWORDS = (
    "VOLUNTARY", "VOLONTAIRE", "RESIGN", "DEMISSION", "DÉMISSION", "QUIT", "RETIRE", "RETRAITE",
)


def _key(value) -> str:
    return str(value).strip().upper()


def normalize_status(value: Union[str, EmploymentStatus, None]) -> EmploymentStatus:
    """Map a raw status label (English or French) to an EmploymentStatus."""
    if isinstance(value, EmploymentStatus):
        return value
    if value is None:
        return EmploymentStatus.OTHER
    return _STATUS_ALIASES.get(_key(value), EmploymentStatus.OTHER)


def normalize_gender(value: Union[str, Gender, None]) -> Gender:
    """Case-insensitive gender normalisation; unknown codes are UNSPECIFIED."""
    if isinstance(value, Gender):
        return value
    if value is None:
        return Gender.UNSPECIFIED
    return _GENDER_ALIASES.get(_key(value), Gender.UNSPECIFIED)


def normalize_contract_type(value: Union[str, ContractType, None]) -> Optional[ContractType]:
    """Map a raw contract label to a ContractType, or None when missing."""
    if isinstance(value, ContractType):
        return value
    if value is None or not str(value).strip():
        return None
    key = _key(value)
    if key in _CONTRACT_ALIASES:
        return _CONTRACT_ALIASES[key]
    if any(keyword in key for keyword in _APPRENTICESHIP_KEYWORDS):
        return ContractType.APPRENTICESHIP
    return ContractType.OTHER


def normalize_sector(value: Union[str, Sector]) -> Sector:
    """English or French sector name to a Sector; raises ValueError when unknown."""
    if isinstance(value, Sector):
        return value
    key = _key(value)
    if key in _SECTOR_ALIASES:
        return _SECTOR_ALIASES[key]
    return Sector(key.lower())


def normalize_exit_reason(value: Union[str, ExitReason, None]) -> ExitReason:
    """Keyword classification of a raw departure reason; blank or unrecognised is UNKNOWN."""
    if isinstance(value, ExitReason):
        return value
    if value is None or not str(value).strip():
        return ExitReason.UNKNOWN
    key = _key(value)
    if any(keyword in key for keyword in _INVOLUNTARY_KEYWORDS):
        return ExitReason.INVOLUNTARY
    if any(keyword in key for keyword in _VOLUNTARY_KEYWORDS):
        return ExitReason.VOLUNTARY
    return ExitReason.UNKNOWN


# Explicit exports
__all__ = [
    "EmploymentStatus",
    "Gender",
    "ContractType",
    "Sector",
    "ExitReason",
    "normalize_status",
    "normalize_gender",
    "normalize_contract_type",
    "normalize_sector",
    "normalize_exit_reason",
]
