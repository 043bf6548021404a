"""Utilities for Task Tracker"""
