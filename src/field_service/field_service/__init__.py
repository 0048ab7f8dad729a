"""Field Service Console package.

This package is organized by feature modules (organizations, promotions,
employees, schedules, time_clock, calls, fuel) with a thin Flask controller
layer over service and repository layers. Every repository talks to the
REST backend through the shared API client and query cache.
"""
