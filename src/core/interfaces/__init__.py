"""Core interfaces.

Contracts (Protocol) implemented by concrete adapters, so the pipeline depends
on abstractions.
"""
