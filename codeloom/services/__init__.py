# Services package init
"""
Codeloom Backend - Services Layer
==================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services receive the request's AsyncSession, apply business rules and
       return pydantic response models or raise application exceptions.

Service Inventory:
    - PracticeService: practice lookup, onboarding and plan changes
    - PracticeConfigService: per-practice feature configuration
"""
