from __future__ import annotations

import json
from typing import Any

import numpy as np
import streamlit.components.v1 as components

THREE_CDN = "https://cdn.jsdelivr.net/npm/three@0.159.0/build/three.min.js"
ORBIT_CDN = "https://cdn.jsdelivr.net/npm/three@0.159.0/examples/js/controls/OrbitControls.js"
PAIR_FRAME_STORAGE_KEY = "bubblelab.pair3d.frame.v1"

# Floating groups for the hero scene: (speed, rotation, float intensity, range, bubbles).
# Each bubble is (x, y, z, scale, wobble speed).
HERO_GROUPS: tuple[dict[str, Any], ...] = (
    {
        "speed": 2.0,
        "rotation_intensity": 0.5,
        "float_intensity": 1.0,
        "floating_range": (-0.5, 0.5),
        "bubbles": ((0.0, 0.0, 0.0, 2.2, 1.0),),
    },
    {
        "speed": 3.0,
        "rotation_intensity": 1.0,
        "float_intensity": 1.5,
        "floating_range": (-1.0, 1.0),
        "bubbles": (
            (-3.5, 2.0, -2.0, 1.2, 1.2),
            (3.5, -1.5, -3.0, 1.5, 0.8),
            (-2.0, -3.0, -1.0, 0.8, 1.5),
            (2.5, 2.5, -2.0, 1.0, 1.1),
        ),
    },
    {
        "speed": 1.0,
        "rotation_intensity": 0.2,
        "float_intensity": 0.5,
        "floating_range": (-0.1, 0.1),
        "bubbles": ((-5.0, 0.0, -10.0, 3.0, 1.0), (6.0, 4.0, -12.0, 2.0, 1.0)),
    },
)


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _safe_float(value: object, default: float) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if result != result:  # NaN
        return default
    return result


def _hero_payload(seed: int = 7) -> dict[str, Any]:
    rng = np.random.default_rng(seed)
    groups: list[dict[str, Any]] = []
    for group in HERO_GROUPS:
        bubbles = [
            {
                "position": [x, y, z],
                "scale": scale,
                "speed": speed,
                "offset": float(rng.uniform(0.0, 100.0)),
            }
            for x, y, z, scale, speed in group["bubbles"]
        ]
        groups.append(
            {
                "speed": group["speed"],
                "rotation_intensity": group["rotation_intensity"],
                "float_intensity": group["float_intensity"],
                "floating_range": list(group["floating_range"]),
                "phase": float(rng.uniform(0.0, 2.0 * np.pi)),
                "bubbles": bubbles,
            }
        )
    return {"groups": groups, "wobble_amplitude": 0.02}


def _frame_payload(frame: dict[str, Any]) -> dict[str, Any]:
    radius_a = _clamp(_safe_float(frame.get("radius_a", 1.2), 1.2), 0.1, 3.0)
    radius_b = _clamp(_safe_float(frame.get("radius_b", 0.8), 0.8), 0.1, 3.0)
    terminated = bool(frame.get("terminated", False))
    valve_open = bool(frame.get("valve_open", False)) and not terminated
    direction = str(frame.get("particle_direction", "none"))
    if direction not in {"a_to_b", "b_to_a", "none"}:
        direction = "none"
    tick = int(_safe_float(frame.get("tick", 0), 0.0))

    return {
        "frame_seq": f"{tick}:{radius_a:.5f}:{radius_b:.5f}:{int(valve_open)}",
        "tick": tick,
        "radius_a": radius_a,
        "radius_b": radius_b,
        "pressure_a": max(0.0, _safe_float(frame.get("pressure_a", 0.0), 0.0)),
        "pressure_b": max(0.0, _safe_float(frame.get("pressure_b", 0.0), 0.0)),
        "valve_open": valve_open,
        "terminated": terminated,
        "particle_direction": direction,
        "show_particles": valve_open and direction != "none",
        "tint_a": bool(frame.get("tint_a", False)),
        "tint_b": bool(frame.get("tint_b", False)),
        "label_a": str(frame.get("label_a", "Bubble A")),
        "label_b": str(frame.get("label_b", "Bubble B")),
    }


_BUBBLE_MATERIAL_JS = """
  function makeEnvironment(three, renderer, top, bottom) {
    const canvas = document.createElement("canvas");
    canvas.width = 256;
    canvas.height = 128;
    const ctx = canvas.getContext("2d");
    const grad = ctx.createLinearGradient(0, 0, 0, canvas.height);
    grad.addColorStop(0.0, top);
    grad.addColorStop(0.45, "#ffffff");
    grad.addColorStop(0.55, "#d9d4ff");
    grad.addColorStop(1.0, bottom);
    ctx.fillStyle = grad;
    ctx.fillRect(0, 0, canvas.width, canvas.height);
    const tex = new three.CanvasTexture(canvas);
    tex.mapping = three.EquirectangularReflectionMapping;
    tex.colorSpace = three.SRGBColorSpace;
    const pmrem = new three.PMREMGenerator(renderer);
    const envMap = pmrem.fromEquirectangular(tex).texture;
    tex.dispose();
    pmrem.dispose();
    return envMap;
  }

  function makeBubbleMaterial(three, opts) {
    return new three.MeshPhysicalMaterial({
      color: opts.color || 0xffffff,
      roughness: 0.0,
      metalness: opts.metalness || 0.0,
      transmission: opts.transmission,
      thickness: opts.thickness,
      clearcoat: opts.clearcoat || 0.0,
      clearcoatRoughness: 0.0,
      ior: 1.33,
      iridescence: 1.0,
      iridescenceIOR: 1.3,
      iridescenceThicknessRange: opts.thicknessRange,
      transparent: true,
      opacity: 1.0,
      side: opts.doubleSide ? three.DoubleSide : three.FrontSide,
    });
  }

  function makeRenderer(three, mountEl, width, height) {
    const renderer = new three.WebGLRenderer({ antialias: true, alpha: true });
    renderer.setPixelRatio(Math.min(window.devicePixelRatio || 1, 2));
    renderer.setSize(width, height, false);
    renderer.outputColorSpace = three.SRGBColorSpace;
    renderer.toneMapping = three.ACESFilmicToneMapping;
    renderer.domElement.style.width = "100%";
    renderer.domElement.style.height = "100%";
    renderer.domElement.style.display = "block";
    mountEl.appendChild(renderer.domElement);
    return renderer;
  }
"""


def render_bubble_hero(height: int = 560, *, seed: int = 7) -> None:
    """Decorative hero: iridescent bubbles floating and wobbling."""
    payload_json = json.dumps(_hero_payload(seed))
    html_template = """
<div id="bubblelab-hero-root" style="width:100%;height:__HEIGHT__px;position:relative;overflow:hidden;background:radial-gradient(circle at center, rgba(249,248,244,0.0) 0%, rgba(249,248,244,0.85) 80%), #f9f8f4;"></div>
<script src="__THREE_CDN__"></script>
<script>
(function () {
  const container = document.getElementById("bubblelab-hero-root");
  if (!container) return;
  const PAYLOAD = __PAYLOAD__;
__MATERIAL_JS__
  function mapLinear(x, a1, a2, b1, b2) {
    return b1 + ((x - a1) * (b2 - b1)) / (a2 - a1);
  }

  function createHero(three, mountEl) {
    const width = Math.max(320, mountEl.clientWidth || 960);
    const height = Math.max(240, mountEl.clientHeight || 560);
    const scene = new three.Scene();
    const camera = new three.PerspectiveCamera(45, width / height, 0.1, 100);
    camera.position.set(0, 0, 8);
    const renderer = makeRenderer(three, mountEl, width, height);
    scene.environment = makeEnvironment(three, renderer, "#bcd7ff", "#f4e3ff");

    scene.add(new three.AmbientLight(0xffffff, 0.8));
    const key = new three.DirectionalLight(0xffffff, 2.0);
    key.position.set(10, 10, 5);
    scene.add(key);

    const geometry = new three.SphereGeometry(1, 64, 64);
    const material = makeBubbleMaterial(three, {
      metalness: 0.1,
      transmission: 0.95,
      thickness: 2.0,
      clearcoat: 1.0,
      thicknessRange: [100, 800],
      doubleSide: true,
    });

    const floats = PAYLOAD.groups.map(function (group) {
      const holder = new three.Group();
      scene.add(holder);
      const meshes = group.bubbles.map(function (bubble) {
        const mesh = new three.Mesh(geometry, material);
        mesh.position.set(bubble.position[0], bubble.position[1], bubble.position[2]);
        mesh.scale.setScalar(bubble.scale);
        holder.add(mesh);
        return { mesh: mesh, bubble: bubble };
      });
      return { holder: holder, group: group, meshes: meshes };
    });

    const clock = new three.Clock();
    let rafHandle = null;
    function animate() {
      const elapsed = clock.getElapsedTime();
      floats.forEach(function (entry) {
        const g = entry.group;
        const t = g.phase + elapsed;
        const rot = g.rotation_intensity;
        entry.holder.rotation.x = (Math.cos((t / 4) * g.speed) / 8) * rot;
        entry.holder.rotation.y = (Math.sin((t / 4) * g.speed) / 8) * rot;
        entry.holder.rotation.z = (Math.sin((t / 4) * g.speed) / 20) * rot;
        const yPos = Math.sin((t / 4) * g.speed) / 10;
        entry.holder.position.y =
          mapLinear(yPos, -0.1, 0.1, g.floating_range[0], g.floating_range[1]) * g.float_intensity;
        entry.meshes.forEach(function (item) {
          const b = item.bubble;
          const wobbleT = elapsed * b.speed;
          const s = b.scale + Math.sin(wobbleT * 2 + b.offset) * PAYLOAD.wobble_amplitude * b.scale;
          item.mesh.scale.set(s, s, s);
        });
      });
      renderer.render(scene, camera);
      rafHandle = requestAnimationFrame(animate);
    }
    animate();

    const resizeObserver = new ResizeObserver(function () {
      const w = Math.max(320, mountEl.clientWidth || width);
      const h = Math.max(240, mountEl.clientHeight || height);
      camera.aspect = w / h;
      camera.updateProjectionMatrix();
      renderer.setSize(w, h, false);
    });
    resizeObserver.observe(mountEl);

    window.addEventListener("unload", function () {
      if (rafHandle) cancelAnimationFrame(rafHandle);
      resizeObserver.disconnect();
      renderer.dispose();
    });
  }

  function ensureThree() {
    if (!window.THREE) {
      requestAnimationFrame(ensureThree);
      return;
    }
    container.innerHTML = "";
    createHero(window.THREE, container);
  }
  ensureThree();
})();
</script>
"""
    html = (
        html_template.replace("__HEIGHT__", str(height))
        .replace("__THREE_CDN__", THREE_CDN)
        .replace("__MATERIAL_JS__", _BUBBLE_MATERIAL_JS)
        .replace("__PAYLOAD__", payload_json)
    )
    components.html(html, height=height + 2, scrolling=False)


def render_bubble_pair(frame: dict[str, Any], height: int = 420) -> None:
    """Connected-bubbles scene; the frame arrives through a storage channel."""
    payload = _frame_payload(frame)
    payload_json = json.dumps(payload)
    # The scene itself only embeds the labels so its iframe survives per-tick reruns.
    initial_json = json.dumps(
        _frame_payload({"label_a": payload["label_a"], "label_b": payload["label_b"]})
    )

    update_channel_html = f"""
<script>
try {{
  const frame = {payload_json};
  window.localStorage.setItem("{PAIR_FRAME_STORAGE_KEY}", JSON.stringify(frame));
  if (window.parent) {{
    window.parent.__bubblelabPairLatestFrame = frame;
  }}
}} catch (err) {{
  // storage may be blocked; the scene falls back to its initial frame
}}
</script>
"""
    components.html(update_channel_html, height=0, scrolling=False)

    html_template = """
<div id="bubblelab-pair-root" style="width:100%;height:__HEIGHT__px;position:relative;overflow:hidden;border-radius:12px;background:linear-gradient(180deg,#eff6ff 0%,#ffffff 100%);"></div>
<script src="__THREE_CDN__"></script>
<script src="__ORBIT_CDN__"></script>
<script>
(function () {
  const container = document.getElementById("bubblelab-pair-root");
  if (!container) return;
  const FRAME_STORAGE_KEY = "__STORAGE_KEY__";
  const INITIAL_FRAME = __PAYLOAD__;
__MATERIAL_JS__
  function readLatestFrame() {
    try {
      const raw = window.localStorage.getItem(FRAME_STORAGE_KEY);
      if (raw) {
        const parsed = JSON.parse(raw);
        if (parsed && typeof parsed === "object") return parsed;
      }
    } catch (err) {
      // fall through to the parent window
    }
    try {
      const host = window.parent || window;
      if (host.__bubblelabPairLatestFrame) return host.__bubblelabPairLatestFrame;
    } catch (err) {
      // cross-origin parent
    }
    return INITIAL_FRAME;
  }

  function makeLabel(three, text, color, fontPx) {
    const canvas = document.createElement("canvas");
    canvas.width = 512;
    canvas.height = 96;
    const tex = new three.CanvasTexture(canvas);
    tex.colorSpace = three.SRGBColorSpace;
    const sprite = new three.Sprite(new three.SpriteMaterial({ map: tex, transparent: true, depthTest: false }));
    sprite.scale.set(2.4, 0.45, 1);
    let current = null;
    function setText(value) {
      if (value === current) return;
      current = value;
      const ctx = canvas.getContext("2d");
      ctx.clearRect(0, 0, canvas.width, canvas.height);
      ctx.font = fontPx + "px Georgia, serif";
      ctx.fillStyle = color;
      ctx.textAlign = "center";
      ctx.textBaseline = "middle";
      ctx.fillText(value, canvas.width / 2, canvas.height / 2);
      tex.needsUpdate = true;
    }
    setText(text);
    return { sprite: sprite, setText: setText };
  }

  function createEngine(three, mountEl) {
    const width = Math.max(320, mountEl.clientWidth || 720);
    const height = Math.max(240, mountEl.clientHeight || 420);
    const scene = new three.Scene();
    const camera = new three.PerspectiveCamera(40, width / height, 0.1, 100);
    camera.position.set(0, 2, 6);
    const renderer = makeRenderer(three, mountEl, width, height);
    scene.environment = makeEnvironment(three, renderer, "#9cc3ff", "#e7eef8");

    scene.add(new three.AmbientLight(0xffffff, 1.0));
    const spot = new three.SpotLight(0xffffff, 1.0);
    spot.position.set(10, 10, 10);
    scene.add(spot);

    const OrbitControlsCtor = three.OrbitControls || window.OrbitControls;
    const controls = OrbitControlsCtor ? new OrbitControlsCtor(camera, renderer.domElement) : null;
    if (controls) {
      controls.enableZoom = false;
      controls.enablePan = false;
      controls.minPolarAngle = Math.PI / 3;
      controls.maxPolarAngle = Math.PI / 2;
    }

    const root = new three.Group();
    root.position.set(0, -0.5, 0);
    scene.add(root);

    const sphereGeo = new three.SphereGeometry(1, 64, 64);
    function makeBubble(x, label) {
      const group = new three.Group();
      group.position.set(x, 0, 0);
      const material = makeBubbleMaterial(three, {
        transmission: 0.9,
        thickness: 1.5,
        thicknessRange: [200, 600],
      });
      const mesh = new three.Mesh(sphereGeo, material);
      group.add(mesh);
      const name = makeLabel(three, label, "#333333", 52);
      const radiusText = makeLabel(three, "", "#666666", 40);
      const pressureText = makeLabel(three, "", "#0066cc", 40);
      group.add(name.sprite, radiusText.sprite, pressureText.sprite);
      root.add(group);
      return { mesh: mesh, material: material, name: name, radiusText: radiusText, pressureText: pressureText };
    }
    const bubbleA = makeBubble(-2.2, INITIAL_FRAME.label_a);
    const bubbleB = makeBubble(2.2, INITIAL_FRAME.label_b);

    const pipe = new three.Mesh(
      new three.CylinderGeometry(0.15, 0.15, 4, 32),
      new three.MeshStandardMaterial({ color: 0xe5e7eb, transparent: true, opacity: 0.8, metalness: 0.5, roughness: 0.2 })
    );
    pipe.rotation.z = Math.PI / 2;
    root.add(pipe);

    const valveMat = new three.MeshStandardMaterial({ color: 0xf87171 });
    const valve = new three.Mesh(new three.CylinderGeometry(0.25, 0.25, 0.5, 16), valveMat);
    valve.rotation.z = Math.PI / 2;
    valve.position.set(-1, 0, 0);
    root.add(valve);
    const valveLabel = makeLabel(three, "SHUT", "#ffffff", 44);
    valveLabel.sprite.position.set(-1, 0, 0.4);
    valveLabel.sprite.scale.set(1.2, 0.22, 1);
    root.add(valveLabel.sprite);

    const particles = new three.Group();
    const particleGeo = new three.SphereGeometry(0.05, 12, 12);
    const particleMat = new three.MeshBasicMaterial({ color: 0xaaaaaa });
    for (let i = 0; i < 10; i += 1) {
      const p = new three.Mesh(particleGeo, particleMat);
      p.position.set((i - 5) * 0.4, 0, 0);
      particles.add(p);
    }
    root.add(particles);

    let frame = INITIAL_FRAME;
    let lastSeq = null;
    function applyFrame(next) {
      if (!next || next.frame_seq === lastSeq) return;
      lastSeq = next.frame_seq;
      frame = next;
      [[bubbleA, next.radius_a, next.pressure_a, next.tint_a], [bubbleB, next.radius_b, next.pressure_b, next.tint_b]].forEach(function (row) {
        const bubble = row[0];
        const r = Math.max(0.1, row[1]);
        bubble.mesh.scale.setScalar(r);
        bubble.material.color.set(row[3] ? 0xffaaaa : 0xffffff);
        bubble.name.sprite.position.set(0, r + 0.8, 0);
        bubble.radiusText.sprite.position.set(0, r + 0.45, 0);
        bubble.pressureText.sprite.position.set(0, r + 0.15, 0);
        bubble.radiusText.setText("r = " + row[1].toFixed(2));
        bubble.pressureText.setText("P = " + row[2].toFixed(1));
      });
      valveMat.color.set(next.valve_open ? 0x4ade80 : 0xf87171);
      valveLabel.setText(next.valve_open ? "OPEN" : "SHUT");
      particles.visible = !!next.show_particles;
    }
    applyFrame(INITIAL_FRAME);

    const pollTimer = window.setInterval(function () {
      applyFrame(readLatestFrame());
    }, 50);

    const clock = new three.Clock();
    let rafHandle = null;
    function animate() {
      const elapsed = clock.getElapsedTime();
      if (particles.visible) {
        const speed = frame.particle_direction === "a_to_b" ? 2 : -2;
        particles.children.forEach(function (p, i) {
          p.position.x += speed * 0.02;
          if (p.position.x > 2) p.position.x = -2;
          if (p.position.x < -2) p.position.x = 2;
          p.scale.setScalar(1.0 + Math.sin(elapsed * 5 + i) * 0.5);
        });
      }
      if (controls) controls.update();
      renderer.render(scene, camera);
      rafHandle = requestAnimationFrame(animate);
    }
    animate();

    window.addEventListener("unload", function () {
      if (rafHandle) cancelAnimationFrame(rafHandle);
      window.clearInterval(pollTimer);
      renderer.dispose();
    });
  }

  function ensureThree() {
    if (!window.THREE) {
      requestAnimationFrame(ensureThree);
      return;
    }
    container.innerHTML = "";
    createEngine(window.THREE, container);
  }
  ensureThree();
})();
</script>
"""
    html = (
        html_template.replace("__HEIGHT__", str(height))
        .replace("__THREE_CDN__", THREE_CDN)
        .replace("__ORBIT_CDN__", ORBIT_CDN)
        .replace("__STORAGE_KEY__", PAIR_FRAME_STORAGE_KEY)
        .replace("__MATERIAL_JS__", _BUBBLE_MATERIAL_JS)
        .replace("__PAYLOAD__", initial_json)
    )
    components.html(html, height=height + 2, scrolling=False)


__all__ = ["render_bubble_hero", "render_bubble_pair"]
