"""Company repositories package"""
from .base import CompanyRepository
from .database import SQLAlchemyCompanyRepository
from .memory import InMemoryCompanyRepository

__all__ = ['CompanyRepository', 'SQLAlchemyCompanyRepository', 'InMemoryCompanyRepository']
