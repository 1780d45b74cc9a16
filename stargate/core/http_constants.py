"""Constantes HTTP pour éviter les valeurs magiques dans le code.

Ce module définit les codes de statut HTTP utilisés par l'enveloppe de réponse standard
(`responseCode`) et par les gestionnaires d'erreurs.
"""

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
HTTP_INTERNAL_SERVER_ERROR = 500

# Message par défaut de l'enveloppe en cas de succès
DEFAULT_SUCCESS_MESSAGE = "Successful"
