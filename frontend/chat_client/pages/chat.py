import hashlib

import streamlit as st
from chat_client.config import ClientConfig
from chat_client.conversation import ChatSession, ConversationTurn
from chat_client.helpers.language import count_languages
from chat_client.recorder import Recording, VoiceRecorder
from chat_client.utils.api import RelayClient


def _initialize_session_state(config: ClientConfig):
    """Initialize session state for chat."""
    if "chat_session" not in st.session_state:
        st.session_state.chat_session = ChatSession(RelayClient(config))
    if "pending_recordings" not in st.session_state:
        st.session_state.pending_recordings = []
    if "recorder" not in st.session_state:
        st.session_state.recorder = VoiceRecorder(
            on_complete=st.session_state.pending_recordings.append
        )
    if "last_audio_digest" not in st.session_state:
        st.session_state.last_audio_digest = None
    # The sidebar toggle can switch relays between reruns
    st.session_state.chat_session.relay.config = config


def _display_turn(index: int, turn: ConversationTurn):
    with st.chat_message(turn.role):
        st.write(turn.content)
        if turn.role == "assistant" and not turn.is_image_analysis:
            chinese_count, english_count = count_languages(turn.content)
            if chinese_count or english_count:
                st.caption(f"CN: {chinese_count}, EN: {english_count}")
        if turn.image:
            st.image(turn.image, caption="Uploaded image")
        if turn.audio:
            st.audio(turn.audio, format="audio/mpeg" if turn.role == "assistant" else "audio/wav")

        time_col, forward_col = st.columns([4, 1])
        with time_col:
            st.caption(turn.timestamp.strftime("%H:%M:%S"))
        with forward_col:
            if st.button("↪️ Forward", key=f"forward_{index}", help="Send this text again"):
                with st.spinner("Sending message..."):
                    st.session_state.chat_session.forward(turn)
                st.rerun()


def _display_chat_messages(session: ChatSession):
    """Display chat message history."""
    if not session.turns:
        st.info("Start the conversation by typing, recording or uploading a file.")
    for index, turn in enumerate(session.turns):
        _display_turn(index, turn)


def _handle_voice_input(session: ChatSession):
    """Feed a fresh microphone capture through the recorder and send it."""
    st.markdown("🎤 **Voice Input** (Record with microphone)")
    try:
        from st_audiorec import st_audiorec

        wav_audio_data = st_audiorec()
    except Exception as e:
        st.error(f"❌ Audio recording error: {str(e)}")
        return

    if not wav_audio_data:
        return

    digest = hashlib.sha256(wav_audio_data).hexdigest()
    if digest == st.session_state.last_audio_digest:
        return
    st.session_state.last_audio_digest = digest

    recorder: VoiceRecorder = st.session_state.recorder
    recorder.start()
    recorder.write(wav_audio_data)
    recorder.stop()

    pending: list[Recording] = st.session_state.pending_recordings
    with st.spinner("Transcribing voice message..."):
        while pending:
            session.send_voice(pending.pop(0))
    recorder.reset()
    st.rerun()


def _handle_file_upload(session: ChatSession):
    uploaded_file = st.file_uploader(
        "Attach an image, audio or video file:",
        type=["jpg", "jpeg", "png", "webp", "mp3", "wav", "m4a", "webm", "mp4"],
        accept_multiple_files=False,
        key=f"file_uploader_{len(session.turns)}",
    )
    if uploaded_file is None or not st.button("📤 Send File", type="secondary"):
        return

    mime_type = uploaded_file.type or ""
    content = uploaded_file.getvalue()
    if mime_type.startswith("image/"):
        with st.spinner("Analyzing image..."):
            session.submit_image(content, uploaded_file.name)
    elif mime_type.startswith(("audio/", "video/")):
        with st.spinner("Transcribing and summarizing..."):
            session.submit_audio_file(content, uploaded_file.name, mime_type)
    else:
        st.warning(f"Unsupported file type: {uploaded_file.name} ({mime_type})")
        return
    st.rerun()


def show_chat_page(config: ClientConfig):
    """Chat page"""
    st.title("💬 Voice & Vision Chat")

    _initialize_session_state(config)
    session: ChatSession = st.session_state.chat_session

    _display_chat_messages(session)

    st.divider()
    _handle_voice_input(session)
    _handle_file_upload(session)

    user_message = st.chat_input("Type your message here...")
    if user_message and user_message.strip():
        with st.spinner("Sending message..."):
            session.send(user_message)
        st.rerun()
