"""
Streamlit Frontend for Money Tracker

One screen:
1. Balance card with income/expense summary
2. Filter tabs (All / Income / Expense)
3. Entry list with edit and delete
4. Add/edit form
5. Sidebar with configuration status

All UI state (selected filter, which entry is being edited, pending
delete confirmation) lives in st.session_state. The Ledger knows
nothing about it.
"""

from decimal import Decimal

import streamlit as st

from money_tracker.config import get_settings, validate_all_settings
from money_tracker.formatting import format_amount
from money_tracker.ledger import EntryNotFoundError, InvalidInputError, Ledger
from money_tracker.log import configure_logging
from money_tracker.models import Entry, EntryFilter, EntryKind, categories_for
from money_tracker.orchestrator import create_ledger
from money_tracker.services.storage import StorageError


# Page configuration
st.set_page_config(
    page_title="Money Tracker",
    page_icon="💰",
    layout="centered",
)

st.markdown("""
<style>
    .balance-box {
        padding: 20px;
        background-color: #4f46e5;
        color: white;
        border-radius: 16px;
        margin: 10px 0;
    }
    .income-box {
        padding: 12px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
    }
    .expense-box {
        padding: 12px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
    }
    .big-number {
        font-size: 2em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_ledger() -> Ledger:
    """Get or create the process-wide ledger (cached)."""
    configure_logging(get_settings().app.debug_mode)
    return create_ledger()


def init_session_state():
    """Defaults for transient UI state."""
    defaults = {
        "filter": EntryFilter.ALL,
        "show_form": False,
        "editing_id": None,
        "confirm_delete_id": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def main():
    """Main application entry point."""
    ledger = get_ledger()
    init_session_state()

    st.title("💰 Money Tracker")

    render_summary(ledger)

    if st.button("➕ Add Transaction", type="primary"):
        st.session_state.show_form = True
        st.session_state.editing_id = None
        st.rerun()

    if st.session_state.show_form:
        render_entry_form(ledger)

    render_entry_list(ledger)
    render_status_sidebar(ledger)


def render_summary(ledger: Ledger):
    """Balance card plus income/expense totals."""
    totals = ledger.totals()

    st.markdown(f"""
    <div class="balance-box">
        <p>Total Balance</p>
        <p class="big-number">{format_amount(totals.balance)}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"""
        <div class="income-box">
            <p>📈 Income</p>
            <p><strong>{format_amount(totals.income)}</strong></p>
        </div>
        """, unsafe_allow_html=True)
    with col2:
        st.markdown(f"""
        <div class="expense-box">
            <p>📉 Expense</p>
            <p><strong>{format_amount(totals.expense)}</strong></p>
        </div>
        """, unsafe_allow_html=True)


def render_entry_form(ledger: Ledger):
    """Add a new entry, or edit the one in st.session_state.editing_id."""
    editing = None
    if st.session_state.editing_id is not None:
        editing = ledger.get(st.session_state.editing_id)

    st.markdown("---")
    st.subheader("Edit Transaction" if editing else "Add Transaction")

    kind = st.radio(
        "Type",
        options=list(EntryKind),
        index=list(EntryKind).index(editing.kind if editing else EntryKind.EXPENSE),
        format_func=lambda k: k.value.title(),
        horizontal=True,
    )

    options = list(categories_for(kind))
    if editing and editing.category not in options:
        options.append(editing.category)

    with st.form("entry_form", clear_on_submit=True):
        amount = st.number_input(
            "Amount *",
            value=float(editing.amount) if editing else 0.0,
            min_value=0.0,
            step=1000.0,
            format="%.2f",
        )
        category = st.selectbox(
            "Category *",
            options=options,
            index=options.index(editing.category) if editing and editing.category in options else None,
            placeholder="Select category",
        )
        note = st.text_input(
            "Note (optional)",
            value=editing.note if editing else "",
        )

        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button(
                "💾 Update" if editing else "💾 Save",
                type="primary",
            )
        with col2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        st.session_state.show_form = False
        st.session_state.editing_id = None
        st.rerun()

    if submitted:
        try:
            if editing:
                ledger.update(editing.id, kind, Decimal(str(amount)), category, note)
            else:
                ledger.create(kind, Decimal(str(amount)), category, note)
        except InvalidInputError as e:
            st.error(e.message)
            return
        except EntryNotFoundError:
            st.error("That transaction no longer exists.")
        except StorageError as e:
            st.error(f"Failed to save: {e}")
            return

        st.session_state.show_form = False
        st.session_state.editing_id = None
        st.rerun()


def render_entry_list(ledger: Ledger):
    """Filter tabs and the filtered entry list."""
    st.markdown("---")

    selected = st.radio(
        "Show",
        options=list(EntryFilter),
        index=list(EntryFilter).index(st.session_state.filter),
        format_func=lambda f: f.value.title(),
        horizontal=True,
        label_visibility="collapsed",
    )
    st.session_state.filter = selected

    entries = list(ledger.list_entries(selected))
    if not entries:
        st.info("No transactions yet. Tap 'Add Transaction' to record one.")
        return

    for entry in entries:
        render_entry_row(ledger, entry)


def render_entry_row(ledger: Ledger, entry: Entry):
    """One entry with edit/delete buttons and the delete confirmation."""
    icon = "📈" if entry.kind is EntryKind.INCOME else "📉"

    col1, col2, col3, col4 = st.columns([5, 3, 1, 1])
    with col1:
        st.markdown(f"{icon} **{entry.category}**")
        if entry.note:
            st.caption(entry.note)
        st.caption(entry.timestamp.strftime("%d %b %Y"))
    with col2:
        prefix = "+" if entry.signed_amount > 0 else ""
        st.markdown(f"**{prefix}{format_amount(entry.signed_amount)}**")
    with col3:
        if st.button("✏️", key=f"edit_{entry.id}", help="Edit"):
            st.session_state.editing_id = entry.id
            st.session_state.show_form = True
            st.rerun()
    with col4:
        if st.button("🗑️", key=f"delete_{entry.id}", help="Delete"):
            st.session_state.confirm_delete_id = entry.id
            st.rerun()

    if st.session_state.confirm_delete_id == entry.id:
        st.warning("Delete this transaction? This cannot be undone.")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Delete", key=f"confirm_{entry.id}", type="primary"):
                try:
                    ledger.delete(entry.id)
                except StorageError as e:
                    st.error(f"Failed to delete: {e}")
                    return
                st.session_state.confirm_delete_id = None
                st.rerun()
        with col2:
            if st.button("Cancel", key=f"cancel_{entry.id}"):
                st.session_state.confirm_delete_id = None
                st.rerun()


def render_status_sidebar(ledger: Ledger):
    """Configuration status and where the ledger is stored."""
    with st.sidebar:
        st.markdown("### ⚙️ Status")

        status = validate_all_settings()
        sections = [
            ("Storage", "storage"),
            ("Display", "app"),
        ]
        for name, key in sections:
            if status.get(key, False):
                st.success(f"✅ {name} settings OK")
            else:
                error = status.get(f"{key}_error", "Invalid configuration")
                st.error(f"❌ {name} settings - {error}")

        if status.get("storage") is True:
            storage = get_settings().storage
            if storage.backend == "json":
                st.caption(f"Saved to `{storage.path}` (key `{storage.key}`)")
            else:
                st.caption("In-memory storage: entries are lost on restart")
        st.caption(f"{len(ledger)} transactions")

        st.markdown("---")
        st.markdown(
            "Settings come from `MONEY_TRACKER_*` environment variables or a "
            "`.env` file. See `.env.example`."
        )


if __name__ == "__main__":
    main()
