"""Skin tone and seasonal color analysis service"""
