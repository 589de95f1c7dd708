# Celery instance is defined in apmc_project/celery.py
# It creates celery_app object and points it to Django settings
from .celery import celery_app

# 'from apmc_project import *', only exports celery_app
__all__ = ("celery_app",)

""" Start a worker with "celery -A apmc_project worker -l info"
    -A apmc_project imports this module, which exposes celery_app. """
