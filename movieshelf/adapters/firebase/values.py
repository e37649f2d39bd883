"""
Encodage des valeurs typees de l'API REST Firestore.

Firestore represente chaque champ par un objet type :
    {"stringValue": "Alien"}, {"doubleValue": 8.5}, {"integerValue": "3"}, ...

Seuls les types scalaires utilises par les documents de films sont geres ;
les tableaux et maps sont decodes recursivement pour ne pas perdre de donnees.
"""

from typing import Any


def encode_value(value: Any) -> dict[str, Any]:
    """Encode une valeur Python en valeur typee Firestore."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    return {"stringValue": str(value)}


def decode_value(value: dict[str, Any]) -> Any:
    """Decode une valeur typee Firestore en valeur Python."""
    if "stringValue" in value:
        return value["stringValue"]
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "nullValue" in value:
        return None
    if "timestampValue" in value:
        return value["timestampValue"]
    if "arrayValue" in value:
        return [decode_value(item) for item in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    return None


def encode_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Encode un dictionnaire de champs."""
    return {key: encode_value(item) for key, item in data.items()}


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Decode un dictionnaire de champs types."""
    return {key: decode_value(item) for key, item in fields.items()}


def document_id_from_name(name: str) -> str:
    """
    Extrait la cle d'un nom de ressource Firestore.

    Exemple: "projects/p/databases/(default)/documents/movies/abc123" -> "abc123"
    """
    return name.rsplit("/", 1)[-1]
