"""Logging infrastructure"""
