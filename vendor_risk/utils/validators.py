from typing import Iterable


def validate_non_empty_string(value: str, field: str):
    """
    Valida que un campo o cadena no esté vacío.
    """
    if value is None or value.strip() == "":
        raise ValueError(f"El campo '{field}' no puede estar vacío")
    return value.strip()


def normalize_certifications(certs: Iterable[str]) -> list[str]:
    """
    Limpia la lista de certificaciones:
        [" ISO27001", "SOC2", "ISO27001"] -> ["ISO27001", "SOC2"]
    Conserva el orden de la primera aparicion.
    """
    if certs is None:
        raise ValueError("Security certifications list cannot be null")

    result = []
    for cert in certs:
        cert = validate_non_empty_string(cert, "security_certs")
        if cert not in result:
            result.append(cert)
    return result


def validate_page(page: int, page_size: int, max_page_size: int):
    """
    Valida parametros de paginacion (page >= 1, 1 <= page_size <= max).
    """
    if page < 1:
        raise ValueError(f"Page must be >= 1, got {page}")
    if page_size < 1 or page_size > max_page_size:
        raise ValueError(f"Page size must be between 1 and {max_page_size}, got {page_size}")
    return page, page_size
