"""Domain layer per il tracking delle attività.

Logica di business disaccoppiata dalla presentazione (GraphQL/REST) e
dall'infrastruttura di persistenza.
"""
