import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import logging
from pathlib import Path

import streamlit as st
import plotly.express as px
import plotly.graph_objects as go

from budget_game.config import load_config
from budget_game.domain import NEED, WANT, NEEDS, WANTS, SAVINGS
from budget_game.engine import BudgetGame
from budget_game.events import CHECKOUT_COMMITTED, QUARTERLY_EVENT, EventBus
from budget_game.catalog import items_in
from budget_game.functional import SHOPPING_REQUIRED, INSUFFICIENT_FUNDS, EMPTY_CART, error_code
from budget_game.ledger import format_amount
from budget_game.reports import ledger_frame, history_frame, allocation_frame

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

ONBOARDING_PATH = Path.home() / ".budget_game" / "onboarding.json"

st.set_page_config(page_title="Financial Literacy Game", layout="wide")


def onboarding_seen() -> bool:
    try:
        with open(ONBOARDING_PATH, "r", encoding="utf-8") as f:
            return bool(json.load(f).get("seen", False))
    except (OSError, ValueError):
        return False


def mark_onboarding_seen() -> None:
    ONBOARDING_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(ONBOARDING_PATH, "w", encoding="utf-8") as f:
        json.dump({"seen": True}, f)


def on_checkout(event, payload):
    st.session_state.celebrate = True
    return {"celebrate": True}


def on_quarterly_event(event, payload):
    st.session_state.last_event = payload
    return {}


def new_game() -> BudgetGame:
    bus = EventBus()
    bus.subscribe(CHECKOUT_COMMITTED, on_checkout)
    bus.subscribe(QUARTERLY_EVENT, on_quarterly_event)
    return BudgetGame(config=load_config(), bus=bus)


if "game" not in st.session_state:
    st.session_state.game = new_game()
    st.session_state.game.open_shopping()
if "celebrate" not in st.session_state:
    st.session_state.celebrate = False
if "cart_nonce" not in st.session_state:
    st.session_state.cart_nonce = 0
if "last_event" not in st.session_state:
    st.session_state.last_event = None

game: BudgetGame = st.session_state.game
state = game.get_state()
money = lambda v: format_amount(v, game.config.currency)

if not onboarding_seen():
    with st.container(border=True):
        st.subheader("👋 Welcome!")
        st.markdown(
            f"Every month you earn **{money(game.config.paycheck)}**. Buy what you need, "
            "treat yourself to some wants, and whatever you don't spend goes straight to savings. "
            "Every three months something unexpected happens. Aim for **50% needs, 30% wants, 20% savings**."
        )
        if st.button("Got it, let's play", key="btn_onboarding"):
            mark_onboarding_seen()
            st.rerun()

st.sidebar.markdown("### 💰 Financial Literacy Game")
if st.sidebar.button("🔄 Restart Game", key="btn_restart"):
    game.restart()
    st.session_state.cart_nonce += 1
    game.open_shopping()
    st.session_state.celebrate = False
    st.session_state.last_event = None
    st.rerun()

if st.session_state.celebrate:
    st.balloons()
    st.session_state.celebrate = False

st.title("💰 Financial Literacy Game")
st.subheader(f"📅 Progress: Month {state.month} of {game.config.months}")
st.progress(state.month / game.config.months)

if st.session_state.last_event and st.session_state.last_event["month"] == state.month:
    ev = st.session_state.last_event
    if ev["change"] >= 0:
        st.success(f"{ev['name']} ({money(ev['change'])})")
    else:
        st.error(f"{ev['name']} (-{money(abs(ev['change']))})")

if not state.game_over:
    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Available Wealth", money(state.wealth))
    with k2:
        st.metric("📌 Needs", money(state.needs))
    with k3:
        st.metric("🎉 Wants", money(state.wants))
    with k4:
        st.metric("🏦 Savings", money(state.savings))

    if game.shopping_open:
        st.header("🛒 Shopping")
        with st.form("shopping_form"):
            cols = st.columns(2)
            for col, (title, category) in zip(cols, (("📌 Needs", NEED), ("🎉 Wants", WANT))):
                with col:
                    st.markdown(f"**{title}**")
                    for item in items_in(game.catalog, category):
                        label = f"{item.name} ({money(item.price)}){' 🔁' if item.recurring else ''}"
                        qty = st.number_input(
                            label,
                            min_value=0,
                            max_value=20,
                            step=1,
                            value=game.cart.quantity(item.id),
                            key=f"qty_{st.session_state.cart_nonce}_{state.month}_{item.id}",
                        )
                        game.cart.set_quantity(item.id, int(qty))

            checkout_col, cancel_col = st.columns(2)
            with checkout_col:
                checkout = st.form_submit_button("✅ Checkout")
            with cancel_col:
                cancel = st.form_submit_button("✖ Clear Cart")

        preview_total = sum(
            item.price * game.cart.quantity(item.id) for item in game.catalog
        )
        st.caption(f"Cart total: **{money(preview_total)}**, left for savings: "
                   f"**{money(state.wealth - preview_total)}**")

        if checkout:
            result = game.commit_checkout()
            if result.is_right():
                st.rerun()
            elif error_code(result) == INSUFFICIENT_FUNDS:
                st.error(result.get_error()["message"])
            elif error_code(result) == EMPTY_CART:
                st.warning("Add something to your cart first.")
            else:
                st.error(result.get_error()["message"])
        if cancel:
            game.cancel_checkout()
            st.session_state.cart_nonce += 1
            st.rerun()
    else:
        st.success("Shopping done for this month.")

    label = "🏁 Finish the Year" if state.month == game.config.months else "⏭️ Advance to Next Month"
    if st.button(label, key="btn_advance", type="primary"):
        result = game.advance_month()
        if error_code(result) == SHOPPING_REQUIRED:
            st.warning(result.get_error()["message"])
        else:
            game.open_shopping()
            st.rerun()

    with st.expander("💸 Quick allocate"):
        a1, a2, a3 = st.columns(3)
        for col, (category, amount) in zip((a1, a2, a3), ((NEEDS, 3000), (WANTS, 2000), (SAVINGS, 5000))):
            with col:
                if st.button(f"Allocate {money(amount)} to {category.capitalize()}", key=f"btn_alloc_{category}"):
                    result = game.allocate(category, amount)
                    if result.is_left():
                        st.warning(result.get_error()["message"])
                    else:
                        st.rerun()
else:
    st.header("📊 Final Summary")
    result = game.classify_summary()
    s1, s2, s3 = st.columns(3)
    with s1:
        st.metric("Total Needs", money(state.needs), f"{result.p_needs}% of income")
    with s2:
        st.metric("Total Wants", money(state.wants), f"{result.p_wants}% of income")
    with s3:
        st.metric("Total Savings", money(state.savings), f"{result.p_savings}% of income")
    st.subheader(f"🧭 You are a **{result.persona}**")
    st.write(result.summary_line)

    alloc_df = allocation_frame(state, game.config.total_income)
    fig = go.Figure()
    fig.add_trace(go.Bar(x=alloc_df["category"], y=alloc_df["actual_pct"], name="You"))
    fig.add_trace(go.Bar(x=alloc_df["category"], y=alloc_df["target_pct"], name="50/30/20 target"))
    fig.update_layout(barmode="group", yaxis_title="% of income", margin=dict(t=30, b=10, l=10, r=10))
    st.plotly_chart(fig, use_container_width=True)
    st.success("🎉 Great job! You completed a year of financial decisions")

hist = history_frame(game.history())
if len(hist) > 1 or state.has_shopped_this_month:
    st.header("📈 Month by Month")
    long_df = hist.melt(id_vars="month", value_vars=[NEEDS, WANTS, SAVINGS],
                        var_name="category", value_name="amount")
    fig_hist = px.bar(long_df, x="month", y="amount", color="category",
                      labels={"amount": f"Amount ({game.config.currency})"})
    st.plotly_chart(fig_hist, use_container_width=True)

st.header("📝 Activity Log")
log_df = ledger_frame(game.get_ledger())
st.dataframe(
    log_df.assign(change=log_df["change"].map(lambda v: f"{v:+,}" if v else "")),
    use_container_width=True,
    hide_index=True,
)
csv = log_df.to_csv(index=False)
st.download_button("⬇ Download Log", csv, file_name="activity_log.csv")
