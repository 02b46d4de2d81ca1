"""Deployment and operations scripts, run with python -m scripts.<name>"""
