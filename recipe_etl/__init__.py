"""
Recipe ETL: turns free-text recipe records into structured rows.
"""
