#!/usr/bin/env python3
"""
RUN_EXPLODE_FRAME: Build the Entrance Frame and Record its Exploded View
========================================================================

This demo walks through the whole pipeline:
1. Define frame dimensions
2. Build the assembly (24 members for 4 columns)
3. Export the member cut list
4. Animate assembled -> exploded -> assembled, tick by tick
5. Rebuild with new dimensions and show the old loop is dead
6. Save 3D views

Run with:
    python demos/run_explode_frame.py

Outputs:
    artifacts/frame_cutlist.csv       - Member cut list
    artifacts/frame_3d.html           - Static 3D view
    artifacts/frame_explode.html      - Explode animation (press Play)
"""

import csv
import logging
import os
import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from entry_frame import DimensionConfig, FrameScene, StaleAssemblyError, column_positions
from entry_frame.schedule import length_bins, member_schedule, schedule_summary


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def export_cutlist(assembly, outpath: str):
    """Export member cut list to CSV."""
    os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
    
    data = [
        {
            'index': row['index'],
            'role': row['role'],
            'length_m': round(row['length'], 4),
            'length_mm': round(row['length'] * 1000, 1),
        }
        for row in member_schedule(assembly)
    ]
    
    # Sort by length for fabrication efficiency
    data.sort(key=lambda x: (x['length_m'], x['index']))
    
    with open(outpath, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=data[0].keys())
        writer.writeheader()
        writer.writerows(data)
    
    print(f"Cut list exported to: {outpath}")
    return data


def main():
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(levelname)s - %(message)s')
    
    print_header("ENTRANCE FRAME: EXPLODED VIEW")
    
    # =========================================================================
    # STEP 1: DIMENSIONS
    # =========================================================================
    print_header("STEP 1: Dimensions")
    
    config = DimensionConfig(
        column_spacing=0.6,   # 600 mm
        structure_depth=0.6,  # 600 mm
        canopy_overhang=0.6,  # 600 mm
        main_height=3.0,
        canopy_height=0.6,    # 600 mm
        profile_size=0.06,    # 60x60 square tube
    )
    
    print(f"""
    Columns:       {config.column_count} @ {config.column_spacing*1000:.0f} mm
    Column lines:  {', '.join(f'{x:+.2f}' for x in column_positions(config))} m
    Depth:         {config.structure_depth*1000:.0f} mm
    Canopy:        +{config.canopy_height*1000:.0f} mm high, {config.canopy_overhang*1000:.0f} mm overhang
    Main height:   {config.main_height:.2f} m
    Profile:       {config.profile_size*1000:.0f} x {config.profile_size*1000:.0f} mm
    """)
    
    # =========================================================================
    # STEP 2: BUILD
    # =========================================================================
    print_header("STEP 2: Build Assembly")
    
    scene = FrameScene(config)
    assembly = scene.assembly
    
    print(f"\n    Members: {len(assembly)}")
    for role, row in schedule_summary(assembly).items():
        print(f"      {role:<18} {row['count']:>3}  {row['total_length']:.2f} m")
    
    # =========================================================================
    # STEP 3: CUT LIST
    # =========================================================================
    print_header("STEP 3: Cut List")
    
    cutlist_path = "artifacts/frame_cutlist.csv"
    export_cutlist(assembly, cutlist_path)
    
    bins = length_bins(assembly)
    print(f"\n    Length bins (5mm tolerance):")
    for bin_name, indices in bins.items():
        print(f"      {bin_name}: {len(indices)} members")
    
    # =========================================================================
    # STEP 4: ANIMATE
    # =========================================================================
    print_header("STEP 4: Explode Animation")
    
    scene.set_exploded(True)
    ticks_out = scene.run_until_settled()
    home = assembly.assembled_positions
    spread = np.linalg.norm(assembly.current_positions() - home, axis=1)
    print(f"""
    Exploded after {ticks_out} ticks
      Largest member offset: {spread.max()*1000:.0f} mm
      Smallest member offset: {spread.min()*1000:.0f} mm
    """)
    
    scene.set_exploded(False)
    ticks_back = scene.run_until_settled()
    print(f"    Re-assembled after {ticks_back} ticks (residual {scene.animator.residual(False):.1e})")
    
    # =========================================================================
    # STEP 5: REBUILD
    # =========================================================================
    print_header("STEP 5: Rebuild")
    
    old_animator = scene.animator
    scene.rebuild(config.replace(column_spacing=0.9))
    
    try:
        old_animator.step(True)
        print("    Old loop still running: CHECK")
    except StaleAssemblyError:
        print("    Old loop cancelled: OK")
    print(f"    New members: {len(scene.assembly)}")
    print(f"    New column lines: {', '.join(f'{x:+.2f}' for x in column_positions(scene.config))} m")
    
    # =========================================================================
    # STEP 6: 3D VISUALIZATION
    # =========================================================================
    print_header("STEP 6: 3D Visualization")
    
    from entry_frame.viz import create_explode_animation, plot_frame_3d
    
    plot_frame_3d(
        scene.members,
        title="Entrance frame",
        outpath="artifacts/frame_3d.html",
        show=False,
        color_by='role',
    )
    
    scene.set_exploded(True)
    fig = create_explode_animation(scene, n_frames=60, title="Entrance frame: exploded view")
    fig.write_html("artifacts/frame_explode.html")
    print("3D animation saved to: artifacts/frame_explode.html")
    
    scene.teardown()
    
    print_header("DONE")
    return scene


if __name__ == "__main__":
    main()
