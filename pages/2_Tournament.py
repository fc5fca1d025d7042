import json

import streamlit as st

from exceptions import PadelAppError
from roster_service import create_duplas_dataframe, create_leftovers_dataframe
from tournament_service import (
    fixed_pairs_from_tournament,
    regenerate_category,
    roster_from_tournament,
    tournament_to_record,
)
from tournament_store import FileTournamentStore

st.set_page_config(
    initial_sidebar_state="collapsed",
    layout="wide"
)

# --- Page Entry Logic ---
if "active_tournament" not in st.session_state:
    st.error("No active tournament found. Please register or open a tournament.")
    st.switch_page("1_Setup.py")

tournament = st.session_state.active_tournament
store = FileTournamentStore()

st.title(f"🎾 {tournament.name}")
st.markdown(
    f"**{tournament.date.strftime('%d/%m/%Y')}** · {tournament.time} · {tournament.place}"
)

col1, col2, col3 = st.columns(3)
col1.metric("Duplas", tournament.total_duplas)
col2.metric("Suggested Courts", tournament.num_courts)
col3.metric("Match Duration (min)", tournament.match_duration)

for result in tournament.categories:
    with st.container(border=True):
        header_col, button_col = st.columns([4, 1])
        with header_col:
            st.subheader(result.category.display_name)
            st.caption(
                f"{result.total_players} player(s) · {len(result.duplas)} dupla(s) · "
                f"{len(result.preformed_dupla_ids)} pre-formed"
            )
        with button_col:
            if st.button("🔀 Regenerate", key=f"regenerate_{result.category.id}"):
                try:
                    st.session_state.active_tournament = regenerate_category(
                        tournament,
                        result.category.id,
                        roster_from_tournament(tournament, result.category.id),
                        store,
                        fixed_pairs=fixed_pairs_from_tournament(tournament, result.category.id),
                    )
                    st.rerun()
                except PadelAppError as e:
                    st.error(str(e))

        if result.duplas:
            st.dataframe(
                create_duplas_dataframe(result),
                column_config={"dupla_id": None},
                hide_index=True,
                use_container_width=True,
            )
        else:
            st.warning("No duplas could be formed in this category.")

        if result.leftover_players:
            st.info("**Without dupla** (place manually or exclude):")
            st.dataframe(
                create_leftovers_dataframe(result),
                hide_index=True,
                use_container_width=True,
            )

st.download_button(
    "⬇️ Download Tournament JSON",
    data=json.dumps(tournament_to_record(tournament), ensure_ascii=False, indent=2),
    file_name=f"{tournament.name}.json",
    mime="application/json",
)

with st.sidebar:
    st.header("Manage Tournament")
    if st.button("⬅️ Back to Setup"):
        st.switch_page("1_Setup.py")
