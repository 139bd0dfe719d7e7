import gradio as gr

from json_csv_flattener.handlers import (
    export_csv_handler,
    handle_files_clear,
    handle_files_upload,
    preview_rows_handler,
)

# --- UI Definition ---
with gr.Blocks(title="JSON to CSV Flattener") as demo:
    gr.Markdown("# JSON to CSV Flattener")
    gr.Markdown("Upload JSON documents; each file becomes one CSV row and `data` entries become columns.")

    # State
    rows_state = gr.State()

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload JSON Files", file_types=[".json"], file_count="multiple")
            status_msg = gr.Textbox(label="Status", interactive=False)
            document_count = gr.Textbox(label="Document Count", interactive=False)

        # Right Panel: Output
        with gr.Column(scale=1):
            gr.Markdown("### 2. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="data")
            load_preview_btn = gr.Button("Load Preview")
            export_btn = gr.Button("Export CSV", variant="primary")
            download_output = gr.File(label="Download Result")
            preview = gr.JSON(label="Preview (first 3 rows)")

    file_input.upload(
        fn=handle_files_upload,
        inputs=[file_input],
        outputs=[rows_state, status_msg, document_count, preview],
    )

    file_input.clear(
        fn=handle_files_clear,
        inputs=None,
        outputs=[rows_state, status_msg, document_count, preview],
    )

    load_preview_btn.click(
        fn=preview_rows_handler,
        inputs=[rows_state],
        outputs=[preview],
    )

    export_btn.click(
        fn=export_csv_handler,
        inputs=[rows_state, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
