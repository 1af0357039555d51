"""Single-file HTML document template.

The page body produced by `HtmlWriter` is wrapped with embedded CSS, a
navigation sidebar built from the table of contents, and a small search
script, so the result has no external dependencies.
"""

from __future__ import annotations

import base64
import html
from pathlib import Path

from .constants import GENERATOR_URL, HELLO_PAGE, VERSION
from .filesystem import read_image, read_source

LAYOUT_CSS = (
    "*{box-sizing:border-box;font-family:inherit;}"
    "body{background:rgba(0,0,0,0.05);font-weight:400;font-size:16px;margin:0;}"
    "hr{display:block;height:1px;border:0;border-top:1px solid;margin:26px 0;padding:0;}"
    "br{clear:both;}"
    "h1,h2,h3,h4,h5,h6{clear:both;margin:0 0 20px 0;padding-top:4px;}"
    "h1{font-size:175%}h2{font-size:150%}h3{font-size:125%}h4{font-size:115%}h5{font-size:110%}h6{font-size:100%}"
    "p{margin:0 0 24px}a{cursor:pointer;}"
    "pre,samp,code,kbd{font-family:Monaco,Consolas,Liberation Mono,Courier,monospace;font-variant-ligatures:none;}"
    "pre,code{display:block;overflow:auto;white-space:pre;font-size:14px;line-height:16px!important;}"
    "pre{padding:12px;margin:0;}code{padding:0 0 12px 0;margin:12px 12px 0 2px;}"
    ".lineno{padding:0 4px;margin:12px 0 0 0;opacity:.4;text-align:right;float:left;font-size:12px;}"
    "pre .hl_b,code .hl_b{display:block;}"
    "blockquote{margin:0;padding:12px;border-left:4px solid rgba(0,0,0,0.15);}"
    ".ui1,.ui2,.ui3,.ui4,.ui5,.ui6{display:inline-block;line-height:24px;padding:0 4px;border-radius:3px;}"
    ".ui1{background:#e3e3e3;}.ui2{background:#d0e4f5;}.ui3{background:#dbfaf4;}"
    ".ui4{background:#ffedcc;}.ui5{background:#f5d0d0;}.ui6{background:#343131;color:#fcfcfc;}"
    "kbd{display:inline-block;font-weight:700;border:1px solid #888;padding:0 4px;border-radius:4px;"
    "background:linear-gradient(#eee,#fff 85%,#ccc);}"
    ".mouseleft::before{content:\"\\1F5B1 L\";}.mouseright::before{content:\"\\1F5B1 R\";}"
    ".mousewheel::before{content:\"\\1F5B1 \\2195\";}"
    "dl{margin:0 0 24px 0;padding:0;}dt{font-weight:700;margin-bottom:12px;}dd{margin:0 0 12px 24px;}"
    ".table table{margin:0;border-collapse:collapse;border:1px solid;width:100%;}"
    "th{font-weight:700;padding:8px 16px;white-space:nowrap;border:1px solid;}th.wide{width:100%;}"
    "td{padding:8px 16px;font-size:90%;border:1px solid;}td.right{text-align:right;}td.wide{width:100%;}"
    "table.grid{border:none;border-spacing:0;width:100%;}"
    "table.grid td{padding:0;vertical-align:top;border:0;background:none;}"
    "div.frame{position:absolute;width:100%;min-height:100%;max-width:1100px;top:0;left:0;}"
    "#_m{margin-left:300px;min-height:100%;}"
    "div.title{width:300px;padding:.809em 0;text-align:center;font-weight:700;}"
    "div.title>a{font-size:150%;}div.title>a>img{max-width:280px;border:0;}"
    "div.title input{width:270px;border-radius:50px;padding:6px 12px;font-size:80%;}"
    "div.version{margin:.4045em 0 .809em;font-size:90%;}"
    "nav.side{position:fixed;top:0;bottom:0;left:0;width:300px;overflow-y:auto;z-index:999;}"
    "nav.mobile{display:none;font-weight:700;padding:.4045em .809em;position:relative;line-height:50px;text-align:center;}"
    "nav a{color:inherit;text-decoration:none;display:block;}"
    "div.nav p{line-height:32px;padding:0 1.618em;margin:12px 0 0 0;font-weight:700;text-transform:uppercase;font-size:85%;}"
    "div.nav li>.current,div.nav li>ul{display:none;}"
    "div.nav a,div.nav li>label,div.nav li>.current{display:block;padding:.4045em 1.618em;cursor:pointer;}"
    "div.nav .current{font-weight:700;}"
    "div.nav li.h3>a{padding-left:3em;}div.nav li.h4>a{padding-left:4em;}"
    "div.nav li.h5>a{padding-left:5em;}div.nav li.h6>a{padding-left:6em;}"
    "div.nav ul,div.nav li,.breadcrumbs{margin:0;padding:0;list-style:none;}"
    "ul.breadcrumbs,.breadcrumbs li{display:inline-block;}"
    ".menu{position:absolute;top:12px;right:20px;cursor:pointer;padding:0 12px;}.menu::before{content:\"\\2630\";}"
    ".home{cursor:pointer;}.home::before{content:\"\\2302\";}"
    "h1>a,h2>a,h3>a,h4>a,h5>a,h6>a{display:none;margin-left:5px;text-decoration:none;}"
    "h1:hover>a,h2:hover>a,h3:hover>a,h4:hover>a,h5:hover>a,h6:hover>a{display:inline-block;}"
    "h1>a::before,h2>a::before,h3>a::before,h4>a::before,h5>a::before,h6>a::before{content:\"\\00B6\";}"
    "input[type=radio]{display:none;}"
    ".fig{margin-top:-12px;padding-bottom:12px;text-align:center;font-style:italic;}"
    "div.page{width:100%;padding:1.618em 3.236em;line-height:24px;}"
    "div.page ul,div.page ol{margin:0 0 24px 24px;padding-left:0;}"
    "div.pre{overflow-x:auto;margin:1px 0 24px;}div.table{overflow-x:auto;margin:0 0 24px;}"
    "div.info,div.hint,div.warn{padding:12px;line-height:24px;margin-bottom:24px;}"
    "div.info>p,div.hint>p,div.warn>p{margin:0;}"
    "div.info>p:first-child,div.hint>p:first-child,div.warn>p:first-child{font-weight:700;padding:2px 8px;margin:-12px -12px 8px -12px;}"
    "img{border:0;}img.imgt{display:inline-block;max-height:22px;vertical-align:middle;}"
    "img.imgl{float:left;margin:0 12px 12px 0;}img.imgr{float:right;margin:0 0 12px 12px;}"
    "div.imgc{text-align:center;clear:both;}img.imgc{max-width:100%;}img.imgw{width:100%;margin-bottom:12px;clear:both;}"
    ".btn{border-radius:2px;white-space:nowrap;color:inherit;cursor:pointer;padding:4px 12px 8px;border:1px solid rgba(0,0,0,.1);text-decoration:none;}"
    ".prev{float:left;}.prev::before{content:\"\\2190  \";}.next{float:right;}.next::after{content:\"  \\2192\";}"
    "footer{width:100%;padding:0 3.236em;}footer p{opacity:0.6;}footer a{color:inherit;}"
    "@media screen and (max-width:991.98px){nav.mobile{display:block;}nav.side{display:none;}"
    "#menuchk:checked ~ nav.side{display:block;}#_m{margin-left:0;}}"
)

DEFAULT_THEME_CSS = (
    "hr,table,th,td{border-color:#e1e4e5;}"
    "th{background:#d6d6d6;}"
    "tr:nth-child(odd){background:#f3f6f6;}"
    "a{text-decoration:none;color:#2980B9;}"
    ".content{background:#fcfcfc;color:#404040;font-family:Lato,Helvetica,Arial,sans-serif;}"
    ".title,.home,h1>a,h2>a,h3>a,h4>a,h5>a,h6>a{background:#2980B9;color:#fcfcfc;}"
    ".version{color:rgba(255,255,255,0.3);}"
    ".search{border:1px solid #2472a4;background:#fcfcfc;}"
    ".nav{background:#343131;color:#d9d9d9;}"
    ".nav p{color:#55a5d9;}"
    ".nav label:hover,.nav a:hover{background:#4e4a4a;}"
    ".nav .current{background:#fcfcfc;color:#404040;}"
    ".nav li>ul>li{background:#e3e3e3;}"
    ".nav li>ul>li>a{color:#404040;}"
    ".nav li>ul>li>a:hover{background:#d6d6d6;}"
    ".pre{border:1px solid #e1e4e5;background:#f8f8f8;}"
    ".info{background:#e7f2fa;}.info>p:first-child{background:#6ab0de;color:#fff;}"
    ".hint{background:#dbfaf4;}.hint>p:first-child{background:#1abc9c;color:#fff;}"
    ".warn{background:#ffedcc;}.warn>p:first-child{background:#f0b37e;color:#fff;}"
    ".btn{background:#f3f6f6;}.btn:hover{background:#e5ebeb;}"
    ".hl_h{background-color:#ccffcc;}"
    ".hl_c{color:#808080;font-style:italic;}"
    ".hl_p{color:#1f7199;}"
    ".hl_o{color:#404040;}"
    ".hl_n{color:#0164eb;}"
    ".hl_s{color:#986801;}"
    ".hl_t{color:#60A050;}"
    ".hl_k{color:#a626a4;}"
    ".hl_f{color:#2a9292;}"
    ".hl_v{color:#e95649;}"
)

# c() switches to the page holding an anchor, s() searches page text,
# and on load every navigation label becomes a real link.
SCRIPT = (
    "function m(){document.getElementById(\"menuchk\").checked=false;}"
    "function c(s){var r=document.getElementById(s);"
    "if(r!=undefined){if(r.tagName==\"INPUT\")r.checked=true;"
    "else{var p=r.closest(\"div.page\");"
    "if(p)document.getElementById(\"_\"+(p.getAttribute(\"rel\")==\"_\"?\"\":p.getAttribute(\"rel\"))).checked=true;}}m();}"
    "function s(q){var r=document.getElementById(\"_s\"),t=document.getElementById(\"_t\"),"
    "p=document.getElementById(\"_m\").getElementsByClassName(\"page\"),i,j,a,h,n,e,seen;"
    "if(!q){t.style.display=\"block\";r.style.display=\"none\";return;}"
    "q=q.toLowerCase();t.style.display=\"none\";r.style.display=\"block\";"
    "while(r.firstChild)r.removeChild(r.firstChild);"
    "n=document.createElement(\"p\");n.appendChild(document.createTextNode(RSLT));r.appendChild(n);"
    "for(i=0;i<p.length;i++){a=p[i].getAttribute(\"rel\");h=p[i].getElementsByTagName(\"H1\")[0];"
    "h=h?h.innerText:\"\";seen=\"\";e=p[i].children;"
    "for(j=0;j<e.length;j++){if(/^H[1-6]$/.test(e[j].tagName)&&e[j].id){a=e[j].id;h=e[j].innerText;continue;}"
    "if(a!=seen&&e[j].innerText!=undefined&&e[j].innerText.toLowerCase().indexOf(q)!=-1){seen=a;"
    "n=document.createElement(\"a\");n.appendChild(document.createTextNode(h));"
    "n.setAttribute(\"href\",\"#\"+a);n.setAttribute(\"onclick\",\"c('\"+a+\"');\");r.appendChild(n);}}}}"
    "document.addEventListener(\"DOMContentLoaded\",function(){var r,l,n;"
    "document.getElementById(\"_q\").style.display=\"inline-block\";"
    "if(document.location.href.indexOf(\"?\")!=-1){document.location.href=document.location.href.replace(\"?\",\"#\");return;}"
    "r=document.querySelectorAll(\"LABEL:not(.menu)\");"
    "while(r.length){l=r[0].getAttribute(\"for\").substr(1);"
    "n=document.createElement(\"a\");n.appendChild(document.createTextNode(r[0].innerText));"
    "n.setAttribute(\"href\",\"#\"+l);n.setAttribute(\"onclick\",\"c('\"+(l!=\"\"?l:\"_\")+\"');\");"
    "[\"class\",\"title\",\"accesskey\"].forEach(function(k){if(r[0].getAttribute(k)!=undefined)n.setAttribute(k,r[0].getAttribute(k));});"
    "r[0].parentNode.replaceChild(n,r[0]);r=document.querySelectorAll(\"LABEL:not(.menu)\");}"
    "try{c(document.location.href.split(\"#\")[1]);}catch(e){}});"
)


def page_selector_css(page_ids: list[str]) -> str:
    """Build the rules that show only the page whose radio input is checked."""
    toc_rules = "".join(f"#_{key}:checked ~ nav div ul li[rel={key}]>.toc," for key in page_ids)
    shown = "".join(
        f"#_{key}:checked ~ nav div ul li[rel={key}]>ul,"
        f"#_{key}:checked ~ nav div ul li[rel={key}]>.current,"
        f"#_{key}:checked ~ div div[rel={key}],"
        for key in page_ids
    )
    return f"{toc_rules}div.page{{display:none;}}{shown}#_:checked ~ div div[rel={HELLO_PAGE}]{{display:block;}}"


def navigation(session) -> str:
    """Render the table of contents as the sidebar menu."""
    lines: list[str] = []
    # an open outer <ul>, and an open page <li> with its inner <ul>
    in_list = in_page = False

    def close_list():
        if in_page:
            lines.append("        </ul></li>")
        if in_list:
            lines.append("        </ul>")

    for key, entry in session.toc.entries.items():
        if entry.level == 0:
            close_list()
            in_list = in_page = False
            lines.append(f"        <p>{entry.name}</p>")
        elif entry.level == 1:
            if in_page:
                lines.append("        </ul></li>")
            elif not in_list:
                lines.append("        <ul>")
            lines.append(
                f'        <li rel="{key}"><label class="toc" for="_{key}">{entry.name}</label>'
                f'<div class="current">{entry.name}</div><ul>'
            )
            in_list = in_page = True
        else:
            if not in_list:
                lines.append("        <ul>")
                in_list = True
            lines.append(
                f'          <li class="h{entry.level}"><a href="#{key}" onclick="m()">{entry.name}</a></li>'
            )
    close_list()
    return "\n".join(lines)


def _radio_inputs(session, page_ids: list[str]) -> str:
    inputs = []
    if session.hello_used:
        inputs.append(f'<input type="radio" name="page" id="{HELLO_PAGE}" checked>')
    for index, key in enumerate(page_ids):
        checked = " checked" if not session.hello_used and index == 0 else ""
        inputs.append(f'<input type="radio" name="page" id="_{key}"{checked}>')
    return "".join(inputs)


def _load_theme(session) -> str:
    theme = session.labels.get("theme", "")
    if not theme:
        return DEFAULT_THEME_CSS
    try:
        css = read_source(Path(theme), session.config.max_file_size)
    except OSError as error:
        session.diagnostics.io_error(theme, f"unable to read theme css ({error})")
        return DEFAULT_THEME_CSS
    return css.replace("\r", "").replace("\n", "").strip()


def _title_html(session) -> tuple[str, str]:
    """Return the plain page title and the sidebar title markup."""
    labels = session.labels
    title = labels.get("title", "")
    image_spec = labels.get("titleimg", "")
    if not image_spec:
        plain = title or "No Name"
        return plain, plain

    image_path, _, alt = image_spec.partition(" ")
    plain = f"{alt} {title}".strip() or "No Name"
    try:
        image = read_image(Path(image_path), session.config.max_file_size)
    except OSError as error:
        session.diagnostics.io_error(image_path, f"unable to read image ({error})")
        return plain, plain
    data = base64.b64encode(image.data).decode("ascii")
    tag = f'<img alt="{html.escape(alt)}" src="data:{image.mime};base64,{data}">'
    return plain, tag + title


def render_document(session, body: str) -> str:
    """Wrap `body` into the complete HTML document.

    Args:
        session: Finished build; its labels, table of contents and
            configuration drive the template.
        body: Page markup produced by `HtmlWriter`.

    Returns:
        str: The standalone HTML file content.
    """
    labels = session.labels
    page_ids = [key for key, _ in session.toc.pages_in_order()]
    plain_title, sidebar_title = _title_html(session)
    theme = _load_theme(session)
    permalink = labels["link"].replace("\\", "\\\\").replace('"', '\\"')
    radios = _radio_inputs(session, page_ids)
    script = SCRIPT.replace("RSLT", '"' + labels["rslt"].replace('"', '\\"') + '"')

    return (
        "<!DOCTYPE html>\n"
        f'<html lang="{labels["lang"]}">\n'
        "<head>\n"
        '  <meta charset="utf-8">\n'
        f'  <meta name="generator" content="gendoc {VERSION}: {GENERATOR_URL}">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>{plain_title}</title>\n"
        f'  <style rel="logic">{LAYOUT_CSS}'
        "h1>a:hover::after,h2>a:hover::after,h3>a:hover::after,h4>a:hover::after,h5>a:hover::after,h6>a:hover::after"
        f'{{content:"{permalink}";display:block;padding:12px;position:absolute;font-weight:400;font-size:14px;'
        "background:rgba(0,0,0,.8);color:#fff;border-radius:4px;}"
        f"{page_selector_css(page_ids)}</style>\n"
        f'  <style rel="theme">{theme}</style>\n'
        "</head>\n"
        "<body>\n"
        '  <div class="frame content">\n'
        f"    {radios}{chr(10) if radios else ''}"
        '    <input type="checkbox" id="menuchk" style="display:none;"><nav class="side nav"><div>\n'
        f'      <div class="title"><a href="{labels["url"]}">{sidebar_title}</a>'
        f'<div class="version">{labels["version"]}</div>'
        '<input id="_q" class="search" type="text" required="required" onkeyup="s(this.value);"></div>'
        '      <div id="_s" class="nav"></div>\n'
        '      <div id="_t" class="nav">\n'
        f"{navigation(session)}\n"
        "      </div>\n"
        "    </div></nav>\n"
        '    <div id="_m">\n'
        f'      <nav class="mobile title">{plain_title}<label for="menuchk" class="menu"></label></nav>\n'
        f"{body}\n"
        f'      <footer><hr><p>© Copyright {labels["copy"]}<br><small>Generated by '
        f'<a href="{GENERATOR_URL}">gendoc</a> v{VERSION}</small></p></footer>\n'
        "    </div>\n"
        "  </div>\n"
        f"<script>{script}</script>\n"
        "</body>\n"
        "</html>\n"
    )
