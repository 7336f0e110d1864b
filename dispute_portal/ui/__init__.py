"""Streamlit front end for suppliers and administrators."""
