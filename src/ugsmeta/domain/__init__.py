"""Domain layer for UGSMETA.

Pure Python: wire-stable enums, project path parsing, the user-event merge
policy, the client-facing metadata records and the fold that builds them.
Nothing here touches storage.
"""
