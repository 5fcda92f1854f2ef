"""Metaprogramming helpers of filtercore."""
