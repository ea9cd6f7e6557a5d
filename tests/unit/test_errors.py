"""Test error code translation."""
from statement_intake.errors import GENERIC_PROCESSING_MESSAGE, ErrorCode, get_localized_error_message

DICTIONARY = {
    "viewer_page": {
        "error_pdf_processing_failed": "Unexpected server error while processing the PDF.",
        "error_data_extraction_failed": "Unexpected server error while extracting banking data.",
        "error_generic_processing": "Generic error message",
    },
}


class TestLocalizedErrorMessage:
    def test_pdf_processing_failed(self):
        assert get_localized_error_message("ERROR_PDF_PROCESSING_FAILED", DICTIONARY) == (
            "Unexpected server error while processing the PDF."
        )

    def test_data_extraction_failed(self):
        assert get_localized_error_message(ErrorCode.DATA_EXTRACTION_FAILED, DICTIONARY) == (
            "Unexpected server error while extracting banking data."
        )

    def test_unknown_code_uses_generic(self):
        assert get_localized_error_message("UNKNOWN_ERROR_CODE", DICTIONARY) == "Generic error message"

    def test_missing_key_uses_generic(self):
        dictionary = {"viewer_page": {"error_generic_processing": "Generic error message"}}
        assert get_localized_error_message("ERROR_PDF_PROCESSING_FAILED", dictionary) == "Generic error message"

    def test_empty_dictionary_uses_builtin(self):
        assert get_localized_error_message("ERROR_PDF_PROCESSING_FAILED", {}) == GENERIC_PROCESSING_MESSAGE
