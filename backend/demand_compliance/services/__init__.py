"""Demand Compliance - Services"""
