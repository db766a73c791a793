import streamlit as st
from chat_client.config import ClientConfig
from chat_client.utils.api import RelayClient, RelayRequestError


def show_sidebar(config: ClientConfig) -> ClientConfig:
    """Show relay selection and status; returns the config to use for this run"""
    st.sidebar.title("⚙️ Relay")
    use_local_api = st.sidebar.toggle(
        "Use local relay",
        value=config.use_local_api,
        help=f"Local relay: {config.local_api_url}",
    )
    config = config.model_copy(update={"use_local_api": use_local_api})
    st.sidebar.caption(f"Relay URL: `{config.base_url}`")

    if st.sidebar.button("🔌 Check connection"):
        try:
            RelayClient(config).ping()
            st.sidebar.success("Relay server is reachable")
        except RelayRequestError as e:
            st.sidebar.error(f"❌ {e.message}")

    if st.sidebar.button("🗑️ Clear conversation"):
        st.session_state.pop("chat_session", None)
        st.rerun()

    # Footer
    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **💬 Voice & Vision Chat**

        Messages, recordings and images are relayed to OpenAI:
        - 💬 Chat completions
        - 🎤 Speech to text
        - 🔊 Text to speech for English replies
        - 🖼️ Image analysis, remembered as context
        """
    )

    return config
