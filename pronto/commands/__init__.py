"""Pronto CLI commands"""
