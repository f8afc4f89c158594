import streamlit as st

# MUST be the first Streamlit command
st.set_page_config(page_title="CV Reflow")

from itertools import count

from cvreflow.config import GEMINI_API_KEY, OUTPUT_FILENAME, configure_logging
from cvreflow.errors import CvReflowError, describe_failure
from cvreflow.pipeline import ExportRequested, UploadRequested, UploadTracker, handle
from cvreflow.schema_resume import CV_SCHEMA, CvRecord

configure_logging()

# (schema key, label, multiline)
EXPERIENCE_FIELDS = [
    ("company", "Company", False),
    ("position", "Position", False),
    ("startDate", "Start Date", False),
    ("endDate", "End Date", False),
    ("responsibilities", "Responsibilities", True),
]
EDUCATION_FIELDS = [
    ("institution", "Institution", False),
    ("degree", "Degree", False),
    ("year", "Year", False),
    ("gpa", "GPA (Optional)", False),
]
CERTIFICATION_FIELDS = [
    ("name", "Certification Name", False),
    ("year", "Year", False),
]

# Initialize session state variables
if "cv" not in st.session_state:
    st.session_state.cv = None          # CvRecord.to_form() + a row "_id" per list item
if "row_ids" not in st.session_state:
    st.session_state.row_ids = count()
# Bumped on every upload so the form widgets pick up the new values
if "form_version" not in st.session_state:
    st.session_state.form_version = 0
# Tracks the upload that was last sent for extraction
if "uploads" not in st.session_state:
    st.session_state.uploads = UploadTracker()
if "upload_error" not in st.session_state:
    st.session_state.upload_error = None


def _key(name: str) -> str:
    return f"{st.session_state.form_version}_{name}"


def _with_row_ids(form: dict) -> dict:
    for section in ("experience", "education", "certifications"):
        for item in form[section]:
            item["_id"] = next(st.session_state.row_ids)
    return form


def _new_row(section: str) -> dict:
    row = dict(CV_SCHEMA[section][0])
    row["_id"] = next(st.session_state.row_ids)
    return row


def _rows_editor(section: str, title: str, fields: list) -> None:
    cv = st.session_state.cv
    st.subheader(title)
    for item in list(cv[section]):
        rid = item["_id"]
        with st.container(border=True):
            cols = st.columns(2)
            short = [f for f in fields if not f[2]]
            for i, (name, label, _) in enumerate(short):
                item[name] = cols[i % 2].text_input(label, value=item[name], key=f"{section}_{rid}_{name}")
            for name, label, _ in (f for f in fields if f[2]):
                item[name] = st.text_area(label, value=item[name], key=f"{section}_{rid}_{name}")
            if st.button("Remove", key=f"{section}_{rid}_remove"):
                cv[section].remove(item)
                st.rerun()
    if st.button(f"+ Add {title}", key=f"{section}_add"):
        cv[section].append(_new_row(section))
        st.rerun()


st.title("📄 → 📄 CV Reflow")
st.markdown("Upload a CV, check the extracted data, download a clean PDF")

api_key = st.text_input("Gemini API key", value=GEMINI_API_KEY or "", type="password")
uploaded_pdf = st.file_uploader("Upload PDF CV", type="pdf")

uploads = st.session_state.uploads
file_id = uploaded_pdf.file_id if uploaded_pdf is not None else None
if file_id is None:
    uploads.reset()
    st.session_state.upload_error = None

retry = False
if file_id is not None and uploads.failed and uploads.handled_id == file_id:
    st.error(st.session_state.upload_error)
    retry = st.button("🔁 Retry extraction")

if uploads.needs_extraction(file_id, retry=retry):
    if not api_key.strip():
        st.warning("Please enter your Gemini API key first!")
    else:
        # Marked before the call: a rerun never re-sends on its own, only Retry does
        uploads.started(file_id)
        with st.spinner("Analyzing your CV..."):
            try:
                record = handle(UploadRequested(uploaded_pdf.getvalue(), api_key.strip()))
            except CvReflowError as e:
                uploads.finished(ok=False)
                st.session_state.upload_error = describe_failure(e)
                st.rerun()
            else:
                uploads.finished(ok=True)
                st.session_state.upload_error = None
                st.session_state.form_version += 1
                st.session_state.cv = _with_row_ids(record.to_form())

# --- Form ---
if st.session_state.cv is not None:
    cv = st.session_state.cv
    info = cv["personalInfo"]

    st.subheader("Personal Information")
    info["name"] = st.text_input("Full Name", value=info["name"], key=_key("info_name"))
    col1, col2 = st.columns(2)
    info["email"] = col1.text_input("Email", value=info["email"], key=_key("info_email"))
    info["phone"] = col2.text_input("Phone", value=info["phone"], key=_key("info_phone"))
    info["linkedin"] = col1.text_input("LinkedIn", value=info["linkedin"], key=_key("info_linkedin"))
    info["location"] = col2.text_input("Location", value=info["location"], key=_key("info_location"))

    cv["summary"] = st.text_area("Professional Summary", value=cv["summary"], key=_key("summary"))

    _rows_editor("experience", "Work Experience", EXPERIENCE_FIELDS)
    _rows_editor("education", "Education", EDUCATION_FIELDS)

    st.subheader("Skills")
    skills_text = st.text_area("One skill per line", value="\n".join(cv["skills"]), key=_key("skills"))
    cv["skills"] = [s.strip() for s in skills_text.splitlines() if s.strip()]

    _rows_editor("certifications", "Certifications", CERTIFICATION_FIELDS)

    cv["languages"] = st.text_input("Languages", value=cv["languages"], key=_key("languages"))

    pdf_bytes = handle(ExportRequested(CvRecord.from_form(cv)))
    st.download_button(
        "⬇️ Download PDF",
        data=pdf_bytes,
        file_name=OUTPUT_FILENAME,
        mime="application/pdf",
        use_container_width=True,
    )
