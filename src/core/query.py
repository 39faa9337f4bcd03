"""Query final del reto SQL.

Es un artefacto constante: no depende de la identidad ni de la respuesta del
webhook. Se reutiliza tanto para guardarla en disco como para enviarla.
"""

from __future__ import annotations

_FINAL_QUERY_LINES = (
    "SELECT p.AMOUNT AS SALARY,",
    "CONCAT(e.FIRST_NAME, ' ', e.LAST_NAME) AS NAME,",
    "TIMESTAMPDIFF(YEAR, e.DOB, CURDATE()) AS AGE,",
    "d.DEPARTMENT_NAME",
    "FROM PAYMENTS p",
    "JOIN EMPLOYEE e ON p.EMP_ID = e.EMP_ID",
    "JOIN DEPARTMENT d ON e.DEPARTMENT = d.DEPARTMENT_ID",
    "WHERE DAY(p.PAYMENT_TIME) <> 1",
    "ORDER BY p.AMOUNT DESC",
    "LIMIT 1;",
)

FINAL_QUERY = "\n".join(_FINAL_QUERY_LINES)


def build_final_query() -> str:
    """Devuelve la query final (highest salary not paid on the 1st)."""

    return FINAL_QUERY
