"""ORM model exports for convenient imports elsewhere in the app."""

from dzhehuti.models.base import Base
from dzhehuti.models.family_situation import FamilySituation
from dzhehuti.models.income import Income
from dzhehuti.models.parameter import Category, Param
from dzhehuti.models.place import City, Country, District, Place, Region
from dzhehuti.models.purchase import PurchaseCategory, PurchaseFrequency
from dzhehuti.models.respondent import Respondent

__all__ = [
    "Base",
    "Category",
    "Param",
    "Country",
    "Region",
    "District",
    "City",
    "Place",
    "PurchaseCategory",
    "PurchaseFrequency",
    "Income",
    "FamilySituation",
    "Respondent",
]
