"""
Doctor profile enums.
"""

from enum import Enum


class Specialization(str, Enum):
    """Ayurvedic branches a doctor can practise."""
    AYURVEDA = "Ayurveda"
    PANCHAKARMA = "Panchakarma"
    RASAYANA = "Rasayana"
    KAYACHIKITSA = "Kayachikitsa"
    SHALYA = "Shalya"
    SHALAKYA = "Shalakya"
    KAUMARBHRITYA = "Kaumarbhritya"
    AGADTANTRA = "Agadtantra"
    BHUTAVIDYA = "Bhutavidya"
    GENERAL_AYURVEDA = "General Ayurveda"


class Language(str, Enum):
    HINDI = "Hindi"
    ENGLISH = "English"
    SANSKRIT = "Sanskrit"
    MARATHI = "Marathi"
    TAMIL = "Tamil"
    TELUGU = "Telugu"
    BENGALI = "Bengali"
    GUJARATI = "Gujarati"
    KANNADA = "Kannada"
    MALAYALAM = "Malayalam"
    PUNJABI = "Punjabi"


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class DoctorSort(str, Enum):
    """Sort orders offered by the doctor directory."""
    RATING = "rating"
    EXPERIENCE = "experience"
    FEE_LOW = "fee-low"
    FEE_HIGH = "fee-high"


DEFAULT_LANGUAGES = [Language.HINDI, Language.ENGLISH]
