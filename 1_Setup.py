import pandas as pd
import streamlit as st

from app_types import CategoryType, Position
from constants import CATEGORY_OPTIONS
from demo_data import fill_with_demo_data
from exceptions import PadelAppError, ValidationError
from logger import setup_logging
from registration_logic import TournamentDraft
from roster_service import create_roster_dataframe, dataframe_to_players, read_roster_csv
from tournament_service import submit_tournament
from tournament_store import FileTournamentStore

setup_logging()


@st.cache_resource
def get_store() -> FileTournamentStore:
    return FileTournamentStore()


def refresh_roster_editor():
    """Rebuilds the roster editor DataFrame from the draft."""
    draft = st.session_state.draft
    st.session_state.roster_df = create_roster_dataframe(draft.players, draft.categories)


def open_tournament(tournament):
    st.session_state.active_tournament = tournament
    st.switch_page("pages/2_Tournament.py")


st.set_page_config(layout="wide", page_title="Padel Duplas Setup")

st.title("🎾 Padel Duplas")

store = get_store()

# --- Saved Tournaments ---
existing_tournaments = store.list_tournaments()

if existing_tournaments:
    st.subheader("Active Tournaments")
    for tournament_name in existing_tournaments:
        with st.container(border=True):
            col1, col2, col3 = st.columns([3, 1, 1])
            with col1:
                st.markdown(f"### {tournament_name}")
            with col2:
                if st.button("▶️ Open", key=f"open_{tournament_name}", use_container_width=True):
                    tournament = store.load(tournament_name)
                    if tournament:
                        open_tournament(tournament)
                    else:
                        st.error(f"Failed to load tournament '{tournament_name}'")
            with col3:
                if st.button("🗑️ Delete", key=f"delete_{tournament_name}", use_container_width=True):
                    store.clear(tournament_name)
                    st.rerun()

    st.divider()

# --- Draft State ---
if "draft" not in st.session_state:
    st.session_state.draft = TournamentDraft()
draft = st.session_state.draft

if "roster_df" not in st.session_state:
    refresh_roster_editor()

# Widget keys are seeded once, so the date input never mixes a default value
# with a value set through session state
for widget_key, initial in (
    ("tournament_name", ""),
    ("tournament_place", ""),
    ("tournament_date", None),
    ("tournament_time", ""),
):
    if widget_key not in st.session_state:
        st.session_state[widget_key] = initial

if st.button("🧪 Fill with Test Data"):
    fill_with_demo_data(draft)
    st.session_state.tournament_name = draft.name
    st.session_state.tournament_date = draft.date
    st.session_state.tournament_time = draft.time
    st.session_state.tournament_place = draft.place
    refresh_roster_editor()
    st.rerun()

# --- 1. Tournament Details ---
st.header("1. Tournament Details")

col1, col2 = st.columns(2)
with col1:
    draft.name = st.text_input("Tournament Name", placeholder="e.g., Padelazo de Verano", key="tournament_name")
    draft.place = st.text_input("Place", placeholder="e.g., Club Padel Masters", key="tournament_place")
with col2:
    draft.date = st.date_input("Date", key="tournament_date")
    draft.time = st.text_input("Time (HH:MM)", placeholder="14:30", key="tournament_time")

# --- 2. Categories ---
st.header("2. Categories")

col1, col2, col3 = st.columns([1, 1, 1], vertical_alignment="bottom")
with col1:
    new_type = st.selectbox(
        "Type",
        [t.value for t in CategoryType],
        key="new_category_type",
    )
with col2:
    new_level = st.selectbox(
        "Level",
        CATEGORY_OPTIONS[CategoryType(new_type)],
    )
with col3:
    if st.button("➕ Add Category", use_container_width=True):
        try:
            category = draft.add_category(new_type, new_level)
            st.toast(f"Category {category.display_name} added.")
            refresh_roster_editor()
        except ValidationError as e:
            st.error(str(e))

if not draft.categories:
    st.info("Add at least one category before registering players.")

for category in list(draft.categories):
    count = len(draft.players_in_category(category.id))
    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown(f"**{category.display_name}** · {count} player(s)")
    with col2:
        if st.button("🗑️ Remove", key=f"remove_category_{category.id}"):
            draft.remove_category(category.id)
            refresh_roster_editor()
            st.rerun()

# --- 3. Players ---
st.header("3. Players")

if draft.categories:
    category_names = [c.display_name for c in draft.categories]

    with st.form(key="add_player_form", clear_on_submit=True):
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            player_name = st.text_input("Name")
        with col2:
            player_rut = st.text_input("RUT", placeholder="12345678-9")
        with col3:
            player_position = st.selectbox("Position", [p.value for p in Position])
        with col4:
            player_category = st.selectbox("Category", category_names)

        if st.form_submit_button("👤 Add Player"):
            category = draft.categories[category_names.index(player_category)]
            try:
                player = draft.add_player(player_name, player_rut, player_position, category.id)
                st.success(f"{player.name} added to {category.display_name}.")
                refresh_roster_editor()
            except ValidationError as e:
                st.error(f"{e.field or 'form'}: {e}")

    uploaded_file = st.file_uploader("Upload Roster CSV", type=["csv"])
    if uploaded_file is not None:
        # Only process if it's a new file (prevent re-processing on reruns)
        file_id = f"{uploaded_file.name}_{uploaded_file.size}"
        if st.session_state.get("last_uploaded_file_id") != file_id:
            st.session_state.last_uploaded_file_id = file_id
            try:
                draft.replace_roster(read_roster_csv(uploaded_file, draft.categories))
                refresh_roster_editor()
                st.success("Successfully loaded players from CSV!")
            except ValidationError as e:
                st.error(str(e))
            except (pd.errors.ParserError, UnicodeDecodeError) as e:
                st.error(f"An error occurred while processing the CSV: {e}")

    column_config = {
        "Position": st.column_config.SelectboxColumn(
            "Position",
            help="Preferred playing side",
            options=[p.value for p in Position],
            default=Position.AMBOS.value,
            required=True,
        ),
        "Category": st.column_config.SelectboxColumn(
            "Category",
            options=category_names,
            required=True,
        ),
        "RUT": st.column_config.TextColumn("RUT", help="Format 12345678-9", required=True),
        "player_id": None,
    }

    edited_df = st.data_editor(
        st.session_state.roster_df,
        column_config=column_config,
        disabled=["#"],
        hide_index=True,
        num_rows="dynamic",
        use_container_width=True,
        key="roster_editor",
    )

    if st.button("✅ Confirm Player List"):
        try:
            draft.replace_roster(dataframe_to_players(edited_df, draft.categories))
            refresh_roster_editor()
            st.session_state.show_success = True
            st.rerun()
        except ValidationError as e:
            st.error(str(e))

    if st.session_state.get("show_success", False):
        st.success("Player list saved!")
        st.session_state.show_success = False

    # --- Pre-formed Duplas ---
    st.subheader("Pre-formed Duplas")
    st.caption("Players who registered together. Everyone else is paired by position.")

    pair_category_name = st.selectbox("Category", category_names, key="pair_category")
    pair_category = draft.categories[category_names.index(pair_category_name)]
    paired_ids = draft.paired_player_ids()
    available = [
        p for p in draft.players_in_category(pair_category.id) if p.id not in paired_ids
    ]

    if len(available) < 2:
        st.info("At least two unpaired players are needed in this category.")
    else:
        col1, col2, col3 = st.columns([2, 2, 1], vertical_alignment="bottom")
        labels = [f"{p.name} ({p.rut})" for p in available]
        with col1:
            first_label = st.selectbox("Player 1", labels, key="pair_player_1")
        with col2:
            second_label = st.selectbox("Player 2", labels, index=1, key="pair_player_2")
        with col3:
            if st.button("🤝 Pair", use_container_width=True):
                try:
                    draft.pair_players(
                        available[labels.index(first_label)].id,
                        available[labels.index(second_label)].id,
                    )
                    st.rerun()
                except ValidationError as e:
                    st.error(str(e))

    for id_1, id_2 in draft.fixed_pairs_in_category(pair_category.id):
        player_1, player_2 = draft.get_player(id_1), draft.get_player(id_2)
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"🤝 {player_1.name} / {player_2.name}")
        with col2:
            if st.button("Unpair", key=f"unpair_{id_1}"):
                draft.unpair_player(id_1)
                st.rerun()

# --- 4. Submit ---
st.header("4. Register Tournament")

if st.button("🚀 Generate Duplas & Register", type="primary"):
    try:
        tournament = submit_tournament(draft, store)
    except ValidationError as e:
        for message in str(e).splitlines():
            st.error(message)
    except PadelAppError as e:
        st.error(f"Could not save the tournament: {e}")
    else:
        open_tournament(tournament)
