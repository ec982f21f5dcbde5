"""Test suite for the laundry order engine"""
