"""Tests for the Redhead DAQ integration."""
