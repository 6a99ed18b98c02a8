# main.py

"""Streamlit web UI for the sensitive data scanner.

Provides a simple interface to check accomplishment text fields before
saving them or sending them to an AI provider, and to preview the
redacted version.
"""

import logging

import streamlit as st

from sensitive_scan.core.exceptions import ScannerError
from sensitive_scan.logging_config import configure_logging
from sensitive_scan.service.config import settings
from sensitive_scan.service.scanner import check_write, redact_fields

configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


def main():
    """Run the Streamlit application UI.

    This function configures the Streamlit page, accepts the three
    accomplishment fields, runs the pre-save check, and displays the
    summary, match metadata and redacted fields.
    """
    st.set_page_config(
        layout="wide", page_title="Sensitive Data Scanner", page_icon="🛡️"
    )

    st.title("Sensitive Data Scanner")
    st.markdown(
        "Check accomplishment text for PII, classification markings and CUI before it is saved or sent to an AI provider."
    )
    st.markdown("---")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Accomplishment")
        fields = {
            "details": st.text_area("Details", height=160),
            "impact": st.text_area("Impact", height=120),
            "metrics": st.text_area("Metrics", height=80),
        }

    with col2:
        st.subheader("Scan Result")

        if st.button("Scan", type="primary"):
            if not any(text and text.strip() for text in fields.values()):
                st.warning("Please enter text to scan.")
                logger.warning("Scan attempted with empty input")

            else:
                try:
                    check = check_write(fields)

                    if not check.blocked:
                        st.success("No sensitive data detected.")
                    else:
                        st.error(check.error)
                        st.dataframe([m.to_audit_dict() for m in check.matches])

                        redaction = redact_fields(fields)
                        for name in redaction.redacted_fields:
                            st.text_area(
                                f"Redacted {name}",
                                value=redaction.fields[name],
                                height=120,
                            )

                    logger.info(
                        "Scan completed",
                        extra={
                            "blocked": check.blocked,
                            "match_count": len(check.matches),
                        },
                    )

                except ScannerError:
                    st.error("The scanner is not configured correctly.")
                    logger.error("Scanner error in main application loop", exc_info=True)

    with st.sidebar:
        st.header("About")
        st.markdown("""
        This tool blocks entries containing:

        - **PII** (SSN, phone, email, DoD ID, date of birth, street address)
        - **Classification markings** (TOP SECRET, SECRET, portion markings)
        - **CUI** (FOUO, NOFORN and other control markings, MGRS and lat/long coordinates, IP and MAC addresses, .mil URLs)

        This system is UNCLASSIFIED. Do not enter classified, CUI, or PII.
        """)


if __name__ == "__main__":
    main()
