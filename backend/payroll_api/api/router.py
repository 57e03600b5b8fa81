from fastapi import APIRouter

from payroll_api.api.budgets import budgets_router
from payroll_api.api.dashboard import dashboard_router
from payroll_api.api.employees import employees_router
from payroll_api.api.ministries import ministries_router
from payroll_api.api.payroll_runs import payroll_runs_router
from payroll_api.api.payslips import payslips_router

api_router = APIRouter()
api_router.include_router(dashboard_router)
api_router.include_router(ministries_router)
api_router.include_router(employees_router)
api_router.include_router(budgets_router)
api_router.include_router(payroll_runs_router)
api_router.include_router(payslips_router)
