from core.query import FINAL_QUERY, build_final_query

EXPECTED = (
    "SELECT p.AMOUNT AS SALARY,\n"
    "CONCAT(e.FIRST_NAME, ' ', e.LAST_NAME) AS NAME,\n"
    "TIMESTAMPDIFF(YEAR, e.DOB, CURDATE()) AS AGE,\n"
    "d.DEPARTMENT_NAME\n"
    "FROM PAYMENTS p\n"
    "JOIN EMPLOYEE e ON p.EMP_ID = e.EMP_ID\n"
    "JOIN DEPARTMENT d ON e.DEPARTMENT = d.DEPARTMENT_ID\n"
    "WHERE DAY(p.PAYMENT_TIME) <> 1\n"
    "ORDER BY p.AMOUNT DESC\n"
    "LIMIT 1;"
)


def test_final_query_is_exact():
    assert build_final_query() == EXPECTED
    assert build_final_query().encode("utf-8") == EXPECTED.encode("utf-8")


def test_final_query_is_stable():
    assert build_final_query() is FINAL_QUERY
    assert build_final_query() == build_final_query()
    assert not build_final_query().endswith("\n")
