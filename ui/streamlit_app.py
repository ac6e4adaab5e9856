import os
import sys

import pandas as pd
import streamlit as st

# Add repo root to sys.path for local package imports
root_path = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if root_path not in sys.path:
    sys.path.append(root_path)

from agents.answer_agent import AnswerAgent
from models.llm_client import LLMClient
from rag.rag_engine import RAGEngine
from utils.config import Settings
from utils.errors import RagError
from utils.file import ensure_dir

st.set_page_config(layout='wide', page_title='PDF RAG Search')
st.title('PDF RAG Search')


@st.cache_resource
def get_engine():
    settings = Settings.from_env()
    return settings, RAGEngine.from_settings(settings)


try:
    settings, engine = get_engine()
except RagError as e:
    st.error(f"Configuration error: {e}")
    st.stop()

# ------------------------------
# Sidebar: ingestion
# ------------------------------

with st.sidebar:
    st.header('Documents')
    uploads = st.file_uploader('Upload PDFs', type=['pdf'], accept_multiple_files=True)
    if st.button('Ingest') and uploads:
        docs_dir = ensure_dir(settings.documents_dir)
        for upload in uploads:
            target = docs_dir / os.path.basename(upload.name)
            target.write_bytes(upload.getbuffer())
            with st.spinner(f'Embedding {upload.name}...'):
                try:
                    result = engine.process_pdf(target)
                    st.success(f"{upload.name}: {result.embeddings_count} chunks stored")
                except RagError as e:
                    st.error(f"{upload.name}: {e}")

    st.header('Search Settings')
    threshold = st.slider('Similarity threshold', 0.0, 1.0, float(settings.similarity_threshold), 0.05)
    top_n = st.number_input('Max results', value=settings.top_n or 5, min_value=1, format='%d')
    generate = st.checkbox('Generate an answer with the LLM', value=False)

# ------------------------------
# Query
# ------------------------------

query = st.text_input('Query')

if st.button('Search') and query.strip():
    engine.threshold = threshold
    try:
        if generate:
            with st.spinner('Generating answer...'):
                answer = AnswerAgent(engine, LLMClient.from_settings(settings), top_k=int(top_n)).answer(query)
            st.subheader('Answer')
            st.write(answer.text)
            chunks = answer.sources
        else:
            result = engine.find_relevant_content(query, top_k=int(top_n))
            chunks = result.chunks if result else []
    except RagError as e:
        st.error(str(e))
        st.stop()

    if not chunks:
        st.info('No relevant results found for your query.')
    else:
        df = pd.DataFrame([c.to_dict() for c in chunks])
        df['source_file'] = [
            (engine.get_resource(rid) or {}).get('source_file') for rid in df['resource_id']
        ]
        st.subheader('Matching Chunks')
        st.dataframe(
            df[['similarity', 'source_file', 'content_chunk']].style.format({'similarity': '{:.4f}'}),
            use_container_width=True,
        )
