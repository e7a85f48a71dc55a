"""Data models for generator codes and payloads."""

from .generator import GeneratorCode, parse_binary, parse_payload, payload_bits
