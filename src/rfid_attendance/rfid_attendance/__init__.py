"""RFID attendance package.

Organized by feature modules (people, schedules, attendance, reference) with a
thin Flask controller layer on top of service/repository layers. The scan
pipeline itself lives in ``attendance.service``.
"""
