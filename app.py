"""Quarto: Gradio web app entry point."""

import logging

import gradio as gr

from quarto.ui.play_tab import build_play_tab

with gr.Blocks(title="Quarto") as demo:
    gr.Markdown("# Quarto")
    gr.Markdown(
        "4x4 board, 16 pieces. Place the piece your opponent gave you, then pick "
        "the piece they must place. Four in a line sharing an attribute wins."
    )

    with gr.Tab("Play"):
        build_play_tab()

if __name__ == "__main__":
    # DEBUG shows the AI's reasoning
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    demo.launch(theme=gr.themes.Soft())
