import streamlit as st
from chat_client.components.sidebar import show_sidebar
from chat_client.config import ClientConfig
from chat_client.pages.chat import show_chat_page
from chat_client.utils.logger import setup_logging

# Page configuration
st.set_page_config(
    page_title="Voice & Vision Chat",
    page_icon="💬",
    layout="centered",
    initial_sidebar_state="expanded",
)


def main():
    """Main application entry point"""
    config = ClientConfig.from_env()
    setup_logging(config.log_level)

    config = show_sidebar(config)
    show_chat_page(config)


if __name__ == "__main__":
    main()
