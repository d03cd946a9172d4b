"""Agents Module"""
