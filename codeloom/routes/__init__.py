# Routes package init
"""
Codeloom Backend - API Routes Package
======================================

Route Inventory:
    - pages.py:      GET   /                                  (landing page HTML)
    - practices.py:  POST  /api/practices                     (onboard a practice)
                     GET   /api/practices/{id}                (practice detail)
                     GET   /api/practices/{id}/plan           (plan entitlements)
                     POST  /api/practices/{id}/plan           (change plan)
                     GET   /api/practices/{id}/config         (configuration)
                     PATCH /api/practices/{id}/config         (update configuration)
    - system.py:     GET   /api/system/healthz|readyz|metrics|client-config|theme
    - health.py:     GET   /health                            (aggregate health)

Routes stay thin: extract request data, call a service, set status and
headers. Business rules live in the services.
"""
