from gpdesk_app.reports.naming import (
    analysis_filename,
    hours_export_filename,
    management_report_filename,
    sanitize_name,
)


def test_sanitize_name():
    assert sanitize_name("Acme Retail, S.L.") == "Acme_Retail__S_L_"
    assert sanitize_name("Año") == "A_o"
    assert sanitize_name("") == "Proyecto"
    assert sanitize_name(None) == "Proyecto"


def test_report_filenames():
    assert management_report_filename("Acme Retail", "2026-08") == "Informe_Gestion_Acme_Retail_2026-08.pdf"
    assert analysis_filename("Acme Retail", "2026-08", "xlsx") == "Acme_Retail_2026-08_Analisis_Detallado.xlsx"
    assert hours_export_filename("", "2026-08") == "Proyecto_2026-08.xlsx"
