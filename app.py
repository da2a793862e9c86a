import random
import re

import streamlit as st
import streamlit.components.v1 as components

import render
import wfc_core
from tiles import default_catalog

st.set_page_config(page_title="Box-Drawing WFC Preview", layout="wide")
st.title("Box-Drawing WFC Preview")

catalog = default_catalog()

with st.sidebar:
    st.header("Grid Settings")
    grid_width = st.slider("Grid Width", 1, 60, 16)
    grid_height = st.slider("Grid Height", 1, 60, 12)
    max_attempts = st.slider("Max Attempts", 1, 500, wfc_core.MAX_ATTEMPTS,
                             help="Restart the whole grid on contradiction up to this many times")
    use_seed = st.checkbox("Fixed Seed", value=False)
    seed = st.number_input("Seed", min_value=0, value=0, step=1) if use_seed else None

    st.header("View Settings")
    stroke_width = st.slider("Stroke Width", 0.2, 3.0, 0.5, 0.1)
    zoom_level = st.slider("Zoom", 25, 200, 100, 5, help="Zoom level (100% = fit to window)")

    if st.button("Regenerate Layout", type="primary"):
        st.session_state.pop('grid', None)
        st.session_state.pop('grid_key', None)

# Generate grid if needed
current_key = (grid_width, grid_height, max_attempts, seed)

if 'grid' not in st.session_state or st.session_state.get('grid_key') != current_key:
    wfc_progress = st.progress(0, text="Collapsing cells...")

    def wfc_update(attempt, attempts, cells, total):
        wfc_progress.progress(cells / total,
                              text="Attempt {}/{} — {}/{} cells".format(attempt, attempts, cells, total))

    rng = random.Random(int(seed)) if seed is not None else random
    result = wfc_core.generate_with_retries(catalog, grid_width, grid_height, rng=rng,
                                            max_attempts=max_attempts,
                                            progress_callback=wfc_update)
    wfc_progress.empty()
    st.session_state.grid = result.grid if result else None
    st.session_state.grid_key = current_key

grid = st.session_state.grid

if grid:
    svg_string = render.render_svg(grid, catalog, stroke_width=stroke_width)
    display_svg = re.sub(r'width="\d+"', 'width="100%"', svg_string, count=1)
    display_svg = re.sub(r'height="\d+"', 'height="100%"', display_svg, count=1)

    html_content = f'''
    <div style="background:#f0f0f0; height:100%; display:flex; align-items:center;
                justify-content:center; overflow:auto; padding:20px; box-sizing:border-box;">
        <div style="background:white; padding:10px; box-shadow: 0 2px 8px rgba(0,0,0,0.1);">
            <div style="width:{zoom_level}vmin; height:{zoom_level}vmin;">
                {display_svg}
            </div>
        </div>
    </div>
    '''
    components.html(html_content, height=700, scrolling=True)

    st.code(render.format_grid(grid), language=None)

    st.download_button(
        "Download SVG",
        svg_string,
        file_name="uwfc-preview.svg",
        mime="image/svg+xml"
    )
else:
    st.error("Every attempt hit a contradiction. Click 'Regenerate Layout' or raise Max Attempts.")
