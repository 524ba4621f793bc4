"""
Toast notifications, carried to the next rendered page with Flask's flash()
"""
from flask import flash


def notify_success(description: str, title: str = "Success") -> None:
    flash({'title': title, 'description': description}, 'success')


def notify_error(description: str, title: str = "Error") -> None:
    flash({'title': title, 'description': description}, 'error')
